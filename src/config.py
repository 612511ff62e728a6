"""
Central configuration for the ScoreSaber PP re-ranking report.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import logging
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
SNAPSHOT_FILE = DATA_FOLDER / "top_players.json"
SNAPSHOT_INDENT = 2

# --- ScoreSaber API ---
SCORESABER_API_URL = "https://scoresaber.com/api"
PLAYERS_ENDPOINT = "/players"
PLAYER_SCORES_ENDPOINT = "/player/{player_id}/scores"

# --- Fetch Limits ---
TOP_PLAYER_LIMIT = 50  # Players taken from the top of the official leaderboard
SCORES_PER_PLAYER = 100  # Top scores requested per player
REQUEST_DELAY_SECONDS = 0.1  # Pause after each per-player fetch

# --- Exclusion Filter ---
EXCLUDED_AUTHOR_TOKEN = "aquaflee"  # Matched against the lowercased level author
EXCLUDED_AUTHOR_LABEL = "Aquaflee"  # Display name used in the report

# --- Report ---
SUMMARY_PREVIEW_ROWS = 20  # Rows of the ranking table written to the log
LOG_LEVEL = logging.INFO
