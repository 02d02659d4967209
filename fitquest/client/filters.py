from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Union

from fitquest.schemas.quest import FitnessLevel, Quest

DURATION_CHOICES = (20, 30, 45, 60)


@dataclass(frozen=True)
class QuestFilter:
    difficulty: Union[FitnessLevel, Literal["all"]] = "all"
    max_duration: Optional[float] = None
    tag: Optional[str] = None

    @property
    def has_active_filters(self) -> bool:
        return self.difficulty != "all" or self.max_duration is not None or self.tag is not None

    def matches(self, quest: Quest) -> bool:
        if self.difficulty != "all" and quest.difficulty != self.difficulty:
            return False
        if self.max_duration is not None and quest.estimated_duration > self.max_duration:
            return False
        if self.tag is not None and self.tag not in quest.tags:
            return False
        return True


def filter_quests(quests: Iterable[Quest], quest_filter: QuestFilter) -> List[Quest]:
    return [q for q in quests if quest_filter.matches(q)]


def collect_tags(quests: Iterable[Quest]) -> List[str]:
    """Unique tags across all quests, sorted."""
    return sorted({tag for q in quests for tag in q.tags})
