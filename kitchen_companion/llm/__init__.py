"""
LLM integration layer.

Responsibilities:
- Manage chat-completion API configuration and credentials.
- Send a single user-role prompt to the remote completion endpoint.
- Report every transport problem as a returned failure, never a raised one.
"""
