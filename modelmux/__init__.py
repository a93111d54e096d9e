"""modelmux: provider routing for a multi-backend LLM request multiplexer."""
