"""Hold'em engine configuration constants."""

# Table Defaults
DEFAULT_STARTING_STACK = 1000  # Chips each player starts the match with
DEFAULT_SMALL_BLIND = 5  # Small blind posted by the button
DEFAULT_BIG_BLIND = 10  # Big blind posted by the non-button player
DEFAULT_PLAYER_NAME = "You"
DEFAULT_OPPONENT_NAME = "Bot"

# Equity Buckets (fraction of opponent holdings beaten)
EQUITY_NUTS_THRESHOLD = 0.95  # "nuts" bucket
EQUITY_VERY_STRONG_THRESHOLD = 0.80  # "very-strong" bucket
EQUITY_STRONG_THRESHOLD = 0.60  # "strong" bucket
EQUITY_MEDIUM_THRESHOLD = 0.40  # "medium" bucket
EQUITY_WEAK_THRESHOLD = 0.20  # "weak" bucket, anything lower is "very-weak"
IS_NUTS_THRESHOLD = 0.999  # Equity at which a holding counts as the absolute nuts

# Preflop Equity Approximation (rank index 0 = deuce .. 12 = ace)
PREFLOP_PAIR_BASE = 0.52  # Equity of 22
PREFLOP_PAIR_SPAN = 0.33  # Added linearly up to AA (0.85)
PREFLOP_UNPAIRED_BASE = 0.45  # Equity floor for unpaired hands before bonuses
PREFLOP_UNPAIRED_SPAN = 0.25  # Scaled by the average rank index
PREFLOP_SUITED_BONUS = 0.03
PREFLOP_CONNECTED_BONUS = 0.02  # Gap of 0 or 1
PREFLOP_SEMI_CONNECTED_BONUS = 0.01  # Gap of 2 or 3
PREFLOP_BIG_CARD_BONUS = 0.05  # Applied once for Q+ and again for A
PREFLOP_EQUITY_MIN = 0.30
PREFLOP_EQUITY_MAX = 0.85

# Board Danger Scoring
BOARD_DANGER_VERY_DANGEROUS = 5  # Score at or above which a board is very dangerous
BOARD_DANGER_DANGEROUS = 3
BOARD_DANGER_MODERATE = 1
BOARD_DANGER_ADJUSTMENT = 0.05  # Equity shift on very dangerous (-) and dry (+) boards

# Hand Potential Sampling
POTENTIAL_MAX_OPPONENT_INDEX = 50  # Outer sampling bound over remaining cards
POTENTIAL_FUTURE_CARDS = 20  # Future board cards sampled per opponent holding

# Basic Bot: made-hand strength by category (HIGH_CARD .. ROYAL_FLUSH)
BASIC_MADE_HAND_STRENGTH = (0.2, 0.4, 0.55, 0.65, 0.7, 0.75, 0.85, 0.9, 0.95, 1.0)
BASIC_DRAW_EQUITY_PER_OUT = 0.04  # Rule-of-four equity estimate
BASIC_DRAW_EQUITY_CAP = 0.7
BASIC_FLUSH_DRAW_OUTS = 9
BASIC_STRAIGHT_DRAW_OUTS = 8
BASIC_COMBO_DRAW_OUTS = 15  # Flush and straight draw together, overlap removed

# Advanced Bot Personality
ADVANCED_AGGRESSION = 0.85  # How often to bet rather than check or call
ADVANCED_BLUFF_FACTOR = 0.70  # Bluff frequency multiplier
ADVANCED_RISK_TOLERANCE = 0.40  # Willingness to make hero calls
ADVANCED_CHIP_LEAD_BIG = 1.3  # Stack ratio above which the big chip-lead bonus applies
ADVANCED_CHIP_LEAD_BIG_BONUS = 0.15
ADVANCED_CHIP_LEAD_SMALL = 1.1
ADVANCED_CHIP_LEAD_SMALL_BONUS = 0.08

# Advanced Bot Preflop Sizing (multiples of the big blind)
ADVANCED_OPEN_PREMIUM_BB = 3.0
ADVANCED_OPEN_BB = 2.5
ADVANCED_THREE_BET_PREMIUM_BB = 3.5
ADVANCED_THREE_BET_BB = 3.0
ADVANCED_MIN_RAISE_BB = 2.5  # Raises at or below this size count as min-raises
ADVANCED_FOUR_BET_POT_MULTIPLIER = 2.0

# Advanced Bot Postflop Sizing (fraction of pot: dry board, other boards)
ADVANCED_BET_SIZING = {
    "small": (0.33, 0.40),
    "medium": (0.50, 0.65),
    "large": (0.75, 1.00),
}
