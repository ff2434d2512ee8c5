"""
Responder strategies.

Turn a conversation history into a response envelope. The deterministic
responder is the default; the generative responder decorates it and falls
back to it on any failure.
"""

from .responders import Decision, DeterministicResponder, GenerativeResponder, Responder

__all__ = ["Decision", "DeterministicResponder", "GenerativeResponder", "Responder"]
