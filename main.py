import argparse
import logging
import random
import sys

from sengoku.config_loader import ConfigLoader
from sengoku.creation import Profession, create_character
from sengoku.game import GameError, LifeSession
from sengoku.life import current_time
from sengoku.paths import CONFIG_DIR, SAVE_DIR
from sengoku.repository import JsonCharacterRepository, RepositoryError


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler()
        ]
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Live out a Sengoku-era life, choosing at random.")
    parser.add_argument("--name", default="Hanzo", help="Character name")
    parser.add_argument("--clan", default="owari", help="Origin province")
    parser.add_argument(
        "--profession",
        default=Profession.BLACKSMITH.value,
        choices=[p.value for p in Profession],
        help="Starting profession",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible life")
    parser.add_argument("--save-dir", default=str(SAVE_DIR), help="Where character files are written")
    parser.add_argument("--config-dir", default=str(CONFIG_DIR), help="Folder holding rules.json")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def play_life(session, rng, max_turns=200):
    """Answer every event at random and let the years pass until the story ends."""
    turns = 0
    while session.character.is_alive and turns < max_turns:
        turns += 1
        event = session.pending_event()
        if event is not None:
            index = rng.randrange(len(event.choices))
            result = session.choose(index)
        else:
            result = session.advance_year()
        for line in result.log:
            logging.info(line)
    return session.character


def run_main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config_loader = ConfigLoader(args.config_dir)
    except (FileNotFoundError, ValueError) as e:
        logging.error(f"Failed to load configuration: {e}")
        return 1

    rules = config_loader.get_life_rules()
    repository = JsonCharacterRepository(args.save_dir)
    rng = random.Random(args.seed)

    character = create_character(args.name, args.clan, args.profession, rules=rules)
    try:
        repository.add_character(character)
    except RepositoryError as e:
        logging.error(f"Failed to save new character: {e}")
        return 1

    snapshot = current_time(character)
    logging.info(
        f"{character.name} of {character.clan}, {character.profession}, "
        f"begins their story in {snapshot.year} ({snapshot.season})."
    )

    session = LifeSession(character, repository, rng=rng, rules=rules)
    try:
        final = play_life(session, rng)
    except GameError as e:
        logging.error(f"The story was interrupted: {e}")
        return 1

    if final.is_alive:
        logging.warning(f"{final.name} is still alive at {final.age}; stopping after the turn limit.")
    else:
        logging.info(
            f"{final.name} died of {final.death_reason} at age {final.age}. "
            f"Final honor: {final.honor} | Gold: {final.gold}"
        )
    logging.info(f"Character saved as {final.id} in {args.save_dir}.")
    return 0


if __name__ == "__main__":
    sys.exit(run_main())
