"""
Feature modules.

Each feature contains its models, schemas, calculators and services.
"""
