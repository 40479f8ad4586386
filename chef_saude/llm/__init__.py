"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Describe callable tools the model may invoke while answering a prompt.
- Run a recipe prompt against Groq, executing tool calls along the way.
- Validate the model's final answer against the recipe list schema.
"""
