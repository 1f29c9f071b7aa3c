"""
High-level use cases for the Capybara API.

Routers call these services instead of talking to repositories directly, so
absence and validation are expressed once, as exceptions from the domain
taxonomy.
"""
