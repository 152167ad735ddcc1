"""Interactive git/GitHub assistant.

Provides:
- A dotenv loader and delimited environment accessor
- Settings and structured logging
- An explicit state machine driving onboarding and the main menu
- git/gh wrappers behind a replaceable command runner
"""
