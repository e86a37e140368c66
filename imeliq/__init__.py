"""Imeliq: tester registration, feedback and pre-order service."""
