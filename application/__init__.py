"""
Application Layer for the Workout Session API.

This package contains:
- ports/: Abstract repository interfaces (what the use cases need)
- use_cases/: Workflows behind each HTTP operation
"""
