"""
FitQuest - AI-generated fitness quests.
"""

__version__ = "1.0.0"
