"""
Command-line interface for CDK stack utilities.
"""
