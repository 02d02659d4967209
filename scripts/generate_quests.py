#!/usr/bin/env python3
"""
Generate one quest per style and print them:  python scripts/generate_quests.py --interest walking
Show the demo set instead:                      python scripts/generate_quests.py --demo
"""
import argparse
import asyncio
import sys
import uuid

from fitquest.client import QuestApiClient, QuestApiError, QuestFilter, collect_tags, filter_quests
from fitquest.client.filters import DURATION_CHOICES
from fitquest.schemas.quest import FITNESS_LEVELS


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Request AI fitness quests from a running FitQuest server.")
    p.add_argument("--base-url", default=None, help="API base url (default: settings.api_base_url)")
    p.add_argument("--demo", action="store_true", help="fetch the fixed demo quests")
    p.add_argument("--level", choices=FITNESS_LEVELS, default="intermediate")
    p.add_argument("--interest", action="append", dest="interests", default=[])
    p.add_argument("--duration", type=int, default=30)
    p.add_argument("--city")
    p.add_argument("--neighborhood")
    p.add_argument("--filter-difficulty", choices=("all",) + FITNESS_LEVELS, default="all")
    p.add_argument("--filter-max-duration", type=int, choices=DURATION_CHOICES)
    p.add_argument("--filter-tag")
    return p.parse_args(argv)


def print_quest(quest) -> None:
    print(f"\n== {quest.title}  [{quest.difficulty}, ~{quest.estimated_duration:g} min]")
    print(quest.narrative)
    for o in quest.objectives:
        print(f"  - {o.description} ({o.target:g} {o.metric}, +{o.xp_reward:g} XP)")
    print(f"  Rewards: {quest.total_xp:g} XP, {quest.coin_reward:g} coins")
    if quest.tags:
        print("  " + " ".join(f"#{t}" for t in quest.tags))


async def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.demo and not args.interests:
        print("Please select at least one interest (--interest) to generate personalized quests.")
        return 2

    location = {k: v for k, v in {"city": args.city, "neighborhood": args.neighborhood}.items() if v}
    request = {
        "userId": str(uuid.uuid4()),
        "fitnessLevel": args.level,
        "interests": args.interests,
        "duration": args.duration,
    }
    if location:
        request["location"] = location

    async with QuestApiClient(base_url=args.base_url) as api:
        try:
            quests = await api.fetch_demo_quests() if args.demo else await api.generate_all_styles(request)
        except QuestApiError as e:
            print(f"{e.title}: {e.message}", file=sys.stderr)
            if e.detail:
                print(f"  {e.detail}", file=sys.stderr)
            return 1

    quest_filter = QuestFilter(
        difficulty=args.filter_difficulty,
        max_duration=args.filter_max_duration,
        tag=args.filter_tag,
    )
    shown = filter_quests(quests, quest_filter)
    print(f"{len(shown)} of {len(quests)} quests. Tags: {', '.join(collect_tags(quests)) or '-'}")
    for quest in shown:
        print_quest(quest)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
