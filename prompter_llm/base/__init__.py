"""Core provider-agnostic building blocks.

Submodules are imported directly (``prompter_llm.base.client``,
``prompter_llm.base.registry``...) to keep import order free of cycles.
"""
