from .entities import SIDES, CellKind, Grid, Level, Position


def create_clue_paths(level: Level, base_url: str) -> dict[str, str]:
    """
    Resolve the hint image location for every clue of a level.

    Clues that name an asset path keep it. The rest are numbered in catalog order
    and resolved under the level's asset folder, e.g. "assets/clues/easylevel/clue2.png".

    Args:
        level: The level whose clues to resolve.
        base_url: Root URL or directory of the clue images.

    Returns:
        Clue id -> asset path.
    """
    base = base_url.rstrip('/')
    paths: dict[str, str] = {}
    for number, (clue_id, info) in enumerate(level.clues.items(), start=1):
        paths[clue_id] = info.asset_path or f"{base}/{level.id}/clue{number}.png"
    return paths


def clue_borders(grid: Grid, position: Position) -> frozenset[str]:
    """
    Sides of a clue cell that touch a letter cell; the presentation layer draws those
    edges to show which way the answer runs. Non-clue cells have no borders.
    """
    cell = grid.classify(position)
    if cell is None or cell.kind is not CellKind.CLUE:
        return frozenset()
    borders: set[str] = set()
    for side in SIDES:
        neighbor = grid.neighbor(position, side)
        if neighbor is not None and grid.classify(neighbor).is_letter:
            borders.add(side)
    return frozenset(borders)
