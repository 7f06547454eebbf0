"""
AI recipe and meal-plan recommendation pipeline.

Responsibilities:
- Compose deterministic prompts from the request and a reference snapshot.
- Embed a versioned JSON output schema in every prompt.
- Interpret the model's reply as success, refusal or malformed output.
- Orchestrate one completion round trip per recommendation.
"""
