"""
FitQuest services package.
"""

from fitquest.services.quest_generator import QuestGenerator, assemble_quest
from fitquest.services.strategies import GenerationStrategy, JsonPromptStrategy, ToolCallStrategy, build_strategy
