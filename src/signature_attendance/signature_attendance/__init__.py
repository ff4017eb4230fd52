"""Signature Attendance package.

Feature modules (learners, attendance, reporting, auth) each carry a thin
Flask controller on top of service/repository layers backed by MySQL.
"""
