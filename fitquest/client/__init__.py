from fitquest.client.filters import QuestFilter, collect_tags, filter_quests
from fitquest.client.quest_api import QuestApiClient, QuestApiError
