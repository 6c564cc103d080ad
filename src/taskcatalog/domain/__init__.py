"""Domain layer — frontmatter, references, rules, and validation.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
