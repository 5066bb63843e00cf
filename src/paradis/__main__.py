import logging
import sys

from dotenv import load_dotenv

from paradis.bootstrap import Settings, configure_logging, create_session_service
from paradis.presentation.main_menu import main_menu


logger = logging.getLogger(__name__)


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Menus: type the number of your choice and press ENTER.")
    print("- Invalid choices are replaced by a random valid one.")
    print("- In battle: 1 fights, 2 asks a comrade for help (3 per mission), 3 tries to escape, any other number quits.")
    print("- Set PARADIS_PACING_S=0 to skip briefing pauses, PARADIS_SEED to replay a mission.")


def main() -> int:
    load_dotenv()
    try:
        settings = Settings.from_env()
        configure_logging(settings)
        session_service = create_session_service(settings)
        main_menu(session_service)
    except (KeyboardInterrupt, EOFError):
        print("\nSession ended.")
    except Exception as exc:
        logger.warning("Session aborted: %s", exc)
        logger.debug("Session aborted", exc_info=True)
        print("An unexpected error occurred. The game closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
    return 0


if __name__ == "__main__":
    sys.exit(main())
