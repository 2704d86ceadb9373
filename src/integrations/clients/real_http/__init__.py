"""
Real HTTP integration clients.

These clients communicate with external systems over HTTP:
- the OpenRouter-compatible completion API used for channel analysis

Important:
- Must return data shaped according to src/integrations/contracts/*

Switching:
Client construction happens in src/api/dependencies.py only.
"""
