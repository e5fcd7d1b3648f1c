"""Onboarding System package.

Feature modules (calendar, onboarding) with a thin Flask controller layer on
top of service/repository layers.
"""
