"""
hms_core - domain-agnostic building blocks

Action registration and dispatch, structured action results and the
OpenAI-compatible LLM client used by the assistant.
"""
