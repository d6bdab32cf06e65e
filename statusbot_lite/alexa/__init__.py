"""Alexa request models, turn handlers and dispatch."""
