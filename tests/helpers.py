from falling_blocks.game import BASE_SHAPES, GameConfig, GameSession, Piece, TetrominoType, rotate_cw


def running_session(seed=1234, **kwargs):
    session = GameSession(GameConfig(random_seed=seed), **kwargs)
    session.start()
    return session


def place(session, kind, x=None, y=0, rotations=0):
    """Replace the active piece with `kind`, optionally rotated and positioned."""
    piece = Piece.spawn(kind, session.grid.width)
    shape = BASE_SHAPES[kind].copy()
    for _ in range(rotations):
        shape = rotate_cw(shape)
    piece.shape = shape
    if x is not None:
        piece.x = x
    piece.y = y
    session.current_piece = piece
    return piece


def safe_next(session, kind=TetrominoType.O):
    session.next_piece = Piece.spawn(kind, session.grid.width)
