"""
Application Layer for the workout session API.

This package contains:
- ports/: Abstract store and collaborator interfaces (what the use cases need)
- use_cases/: Session completion, abort and query workflows
- exceptions: Domain error taxonomy and store errors
"""
