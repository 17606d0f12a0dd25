from clueboard.levels import build_catalog

CAT_ASSET = "https://example.com/clues/cat.png"

# One across word: the clue cell sits left of the answer
CAT_RECORD = {
    "id": "cat",
    "title": "Cat",
    "grid": [
        [{"clue": "1A"}, {"letter": "C"}, {"letter": "A"}, {"letter": "T"}],
    ],
    "clues": {
        "1A": {"answer": "CAT", "assetPath": CAT_ASSET},
    },
}

# 4x5 board mixing clue cells, empty cells and gaps in both directions.
#
#   #  D  O  .  G
#   .  .  W  #  O
#   .  .  L  .  .
#   #  A  S  K  .
NAV_RECORD = {
    "id": "nav",
    "title": "Navigation",
    "secondaryTitle": "Gaps everywhere",
    "grid": [
        [{"clue": "1A"}, {"letter": "D"}, {"letter": "O"}, {"empty": True}, {"letter": "G"}],
        [{"empty": True}, {"empty": True}, {"letter": "W"}, {"clue": "3A"}, {"letter": "O"}],
        [{"empty": True}, {"empty": True}, {"letter": "L"}, {"empty": True}, {"empty": True}],
        [{"clue": "4A"}, {"letter": "A"}, {"letter": "S"}, {"letter": "K"}, {"empty": True}],
    ],
    "clues": {
        "1A": {"answer": "DO"},
        "3A": {"answer": "O"},
        "4A": {"answer": "ASK"},
        "5D": {"answer": "OWLS"},
    },
}

TEST_RECORDS = [CAT_RECORD, NAV_RECORD]

TEST_CATALOG = build_catalog(TEST_RECORDS)
