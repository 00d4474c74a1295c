"""Features module for neo-auth-providers.

- providers: selecting, validating, saving and confirming a provider
- sessions: delegated login through the configured identity provider
"""
