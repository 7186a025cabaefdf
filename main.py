"""Main module to load round history, compute handicaps, and generate a report."""

import sys
import os
import logging

from discgolfdata import RoundHistoryData
from Entities.player import PlayerStats
from report_manager import HandicapReporter

# ---------------- Configuration ----------------
DATA_PATH = "round_data"
PLOTS_FOLDER = "Plots"
TABLES_FOLDER = "Tables"
PDF_FILENAME = "Disc_Golf_Handicap_Report.pdf"
LOG_FILENAME = "handicap_report.log"

# ---------------- Logger Setup ----------------
logger = logging.getLogger("DiscGolfHandicap")
logger.setLevel(logging.INFO)


def setup_logging(log_filename: str = LOG_FILENAME) -> None:
    """Attach console and file handlers to the project logger."""
    if logger.handlers:
        return

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_filename, mode="a")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def run(data_path: str = DATA_PATH) -> HandicapReporter:
    """Load round history, replay it into player statistics and write the report.

    Args:
        data_path (str): File or folder with round history (.csv or .xlsx).

    Returns:
        HandicapReporter: The reporter used, for further inspection.

    Raises:
        RuntimeError: If loading the data or building the report fails.
    """
    logger.info(f"Ensuring output folders exist: {PLOTS_FOLDER}, {TABLES_FOLDER}")
    os.makedirs(PLOTS_FOLDER, exist_ok=True)
    os.makedirs(TABLES_FOLDER, exist_ok=True)

    # Load and preprocess data
    try:
        logger.info(f"Loading round history from '{data_path}'...")
        data_loader = RoundHistoryData(path=data_path)
        rounds_by_player = data_loader.rounds_by_player()
    except Exception as e:
        raise RuntimeError(f"Failed to load round history: {e}") from e
    if not rounds_by_player:
        raise RuntimeError(f"No rounds loaded from '{data_path}'")
    logger.info(f"Loaded rounds for {len(rounds_by_player)} player(s).")

    # Replay history
    stats_by_player = {
        name: PlayerStats.from_history(name, rounds) for name, rounds in rounds_by_player.items()
    }
    for name, stats in stats_by_player.items():
        logger.info(f"{name}: HDCP {stats.display_hdcp} ({stats.tier.label})")

    # Generate report
    reporter = HandicapReporter(
        stats_by_player=stats_by_player,
        save_plots=True,
        save_tables=True,
        plots_folder=PLOTS_FOLDER,
        tables_folder=TABLES_FOLDER,
    )
    try:
        logger.info(f"Generating PDF report '{PDF_FILENAME}'...")
        reporter.build_pdf(PDF_FILENAME)
        logger.info(f"PDF report successfully generated: {PDF_FILENAME}")
    except Exception as e:
        raise RuntimeError(f"Failed to generate PDF report: {e}") from e

    print(reporter.summary_text())
    return reporter


# ---------------- Main Execution ----------------
if __name__ == "__main__":
    setup_logging()
    try:
        logger.info("Starting handicap report generation.")
        run(sys.argv[1] if len(sys.argv) > 1 else DATA_PATH)
        logger.info("Handicap report generation completed successfully.")
    except Exception as e:
        logger.error(e, exc_info=True)
        sys.exit(1)
