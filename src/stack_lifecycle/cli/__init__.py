"""
Command-line interface for the stack lifecycle driver.
"""
