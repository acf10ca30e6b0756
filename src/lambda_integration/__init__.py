"""
Lambda Integration - A system for packaging and deploying AWS Lambda functions.

This package builds zip packages from a function's source directory and shared
libraries, and reconciles the local function definition with AWS Lambda by
creating or updating the function and publishing a new version.
"""

__version__ = "0.1.0"
