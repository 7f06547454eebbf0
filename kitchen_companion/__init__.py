"""
Kitchen Companion AI recommendation core.

Responsibilities:
- Compose deterministic recipe and meal-plan prompts from reference data.
- Call a remote chat-completion model with a single user message.
- Classify the model's reply as success, refusal, malformed output or
  transport failure.
"""
