"""
DevStudio - AI-assisted development backend.

A FastAPI service that turns code-related requests into prompts for
OpenAI, Anthropic, Groq or Gemini, with session chat memory and an
in-memory project/file workspace.
"""
__version__ = "1.0.0"
