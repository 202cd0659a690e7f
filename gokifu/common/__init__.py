"""Common utilities shared by the core and the tools (UI-independent).

This package contains modules with no dependencies on the indexing core:
- locale_utils: language code normalization
- config_store: JSON settings persistence
- typed_config: frozen settings dataclasses
"""
