"""
Core mirror logic.

This module is framework-agnostic - it doesn't import FastAPI, boto3,
or any infrastructure concerns. The object store is reached only through
the ObjectStore protocol, so the engine can be tested with an in-memory
fake.
"""
