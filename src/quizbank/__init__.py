"""
quizbank: ingest Open Trivia Database questions into a normalized database.
"""

__version__ = '0.1.0'
