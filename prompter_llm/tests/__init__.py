"""prompter_llm test suite."""
