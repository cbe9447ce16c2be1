"""zenclass_queries package.

Loads the Zen class seed collections (users, codekata, attendance, topics,
tasks, company drives, mentors) into MongoDB and answers a fixed battery of
analytical questions over them.

Architecture:
- Seed JSON -> normalized documents (parsed date fields) -> MongoDB
- Questions read through small composable primitives (filter, join, group)
- Pydantic models describe the rows each question reports
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
