"""Tests for Connect Four game rules."""

import numpy as np
import pytest

from connectfour.errors import IllegalMove
from connectfour.game import (
    DEFAULT_ROWS,
    DEFAULT_COLS,
    Board,
    Player,
    Outcome,
    opponent,
    new_board,
    legal_moves,
    legal_mask,
    landing_row,
    drop,
    undo,
    has_won,
    completes_four,
    winner,
    is_full,
    is_draw,
    is_terminal,
    outcome,
    board_from_moves,
)


def make_board(pieces, rows=DEFAULT_ROWS, cols=DEFAULT_COLS, support=Player.TWO):
    """
    Board with pieces given as {(row, col): player}.

    Empty cells underneath a piece are filled with `support` pieces so the
    position obeys gravity.
    """
    cells = np.zeros((rows, cols), dtype=np.int8)
    for (r, c), player in pieces.items():
        cells[r, c] = int(player)
    for c in range(cols):
        occupied = np.flatnonzero(cells[:, c])
        if len(occupied):
            below = cells[occupied[0]:, c]
            below[below == 0] = int(support)
    return Board(cells=cells)


def naive_has_run(cells, player, dr, dc):
    """Reference check for a run of four in one orientation."""
    rows, cols = cells.shape
    for r in range(rows):
        for c in range(cols):
            run = 0
            rr, cc = r, c
            while 0 <= rr < rows and 0 <= cc < cols and cells[rr, cc] == player:
                run += 1
                rr += dr
                cc += dc
            if run >= 4:
                return True
    return False


def draw_sequence():
    """42 alternating drops on 6x7 that never line up four."""
    moves = []
    for a, b in [(0, 2), (1, 3), (4, 6)]:
        moves += [a, b, b, a, a, b, b, a, a, b, b, a]
    moves += [5] * 6
    return moves


class TestPlayer:
    def test_opponent(self):
        assert opponent(Player.ONE) is Player.TWO
        assert opponent(Player.TWO) is Player.ONE
        assert Player.ONE.opponent.opponent is Player.ONE

    def test_values_match_cells(self):
        assert int(Player.ONE) == 1
        assert int(Player.TWO) == 2


class TestNewBoard:
    def test_empty_board(self):
        board = new_board()
        assert board.shape == (DEFAULT_ROWS, DEFAULT_COLS)
        assert np.all(board.cells == 0)
        assert board.move_count == 0

    def test_all_moves_legal(self):
        board = new_board(5, 6)
        assert legal_moves(board) == [0, 1, 2, 3, 4, 5]
        assert np.all(legal_mask(board))

    @pytest.mark.parametrize("rows,cols", [(3, 7), (6, 3), (0, 0)])
    def test_too_small_raises(self, rows, cols):
        with pytest.raises(ValueError):
            new_board(rows, cols)

    def test_cells_read_only(self):
        board = new_board()
        with pytest.raises(ValueError):
            board.cells[0, 0] = 1
        with pytest.raises(ValueError):
            drop(board, 0, Player.ONE).cells[0, 0] = 1

    @pytest.mark.parametrize("value", [3, -1])
    def test_unknown_cell_value_raises(self, value):
        cells = np.zeros((6, 7), dtype=np.int8)
        cells[5, 0] = value
        with pytest.raises(ValueError):
            Board(cells=cells)

    def test_floating_piece_raises(self):
        cells = np.zeros((6, 7), dtype=np.int8)
        cells[3, 2] = 1
        with pytest.raises(ValueError):
            Board(cells=cells)

    def test_stacked_pieces_accepted(self):
        cells = np.zeros((6, 7), dtype=np.int8)
        cells[4:, 2] = [2, 1]
        assert Board(cells=cells).move_count == 2


class TestDrop:
    def test_piece_drops_to_bottom(self):
        board = drop(new_board(), 3, Player.ONE)
        assert board[DEFAULT_ROWS - 1, 3] == 1
        assert board.move_count == 1

    def test_pieces_stack(self):
        board = drop(new_board(), 3, Player.ONE)
        board = drop(board, 3, Player.TWO)
        assert board[DEFAULT_ROWS - 1, 3] == 1
        assert board[DEFAULT_ROWS - 2, 3] == 2

    def test_original_untouched(self):
        board = new_board()
        after = drop(board, 2, Player.TWO)
        assert board.move_count == 0
        assert after is not board

    def test_column_full_raises(self):
        board = new_board()
        for i in range(DEFAULT_ROWS):
            board = drop(board, 0, Player.ONE if i % 2 == 0 else Player.TWO)

        assert 0 not in legal_moves(board)
        assert landing_row(board, 0) == -1
        with pytest.raises(IllegalMove):
            drop(board, 0, Player.ONE)

    def test_invalid_column_raises(self):
        board = new_board()
        with pytest.raises(IllegalMove):
            drop(board, -1, Player.ONE)
        with pytest.raises(IllegalMove):
            drop(board, DEFAULT_COLS, Player.ONE)

    def test_illegal_move_is_value_error(self):
        with pytest.raises(ValueError):
            drop(new_board(), 99, Player.ONE)

    def test_random_drops_keep_gravity(self):
        rng = np.random.default_rng(7)
        board = new_board(7, 8)
        player = Player.ONE
        for _ in range(40):
            moves = legal_moves(board)
            if not moves:
                break
            board = drop(board, moves[rng.integers(len(moves))], player)
            player = player.opponent

            for c in range(board.cols):
                column = board.cells[:, c]
                occupied = np.flatnonzero(column != 0)
                if len(occupied):
                    # Contiguous block touching the bottom row
                    assert occupied[-1] == board.rows - 1
                    assert len(occupied) == board.rows - occupied[0]

    def test_legal_moves_never_full(self):
        rng = np.random.default_rng(11)
        board = new_board()
        player = Player.ONE
        while legal_moves(board):
            moves = legal_moves(board)
            for m in moves:
                assert board[0, m] == 0
                drop(board, m, player)  # never raises
            board = drop(board, moves[rng.integers(len(moves))], player)
            player = player.opponent
        assert is_full(board)


class TestUndo:
    def test_round_trip(self):
        rng = np.random.default_rng(3)
        board = new_board()
        player = Player.ONE
        for _ in range(20):
            moves = legal_moves(board)
            column = moves[rng.integers(len(moves))]
            after = drop(board, column, player)
            assert undo(after, column) == board
            assert undo(after, column).cells.tobytes() == board.cells.tobytes()
            board = after
            player = player.opponent

    def test_undo_empty_column_raises(self):
        with pytest.raises(IllegalMove):
            undo(new_board(), 4)

    def test_undo_removes_top_piece(self):
        board, _ = board_from_moves([2, 2, 2])
        board = undo(board, 2)
        assert board[DEFAULT_ROWS - 1, 2] == 1
        assert board[DEFAULT_ROWS - 2, 2] == 2
        assert board[DEFAULT_ROWS - 3, 2] == 0


class TestWinDetection:
    def test_horizontal_win(self):
        board = make_board({(5, c): Player.ONE for c in range(4)})
        assert has_won(board, Player.ONE)
        assert not has_won(board, Player.TWO)

    def test_vertical_win(self):
        board = make_board({(r, 0): Player.TWO for r in range(2, 6)})
        assert has_won(board, Player.TWO)

    def test_diagonal_down_right_win(self):
        board = make_board({(2 + i, i): Player.ONE for i in range(4)})
        assert has_won(board, Player.ONE)
        assert not has_won(board, Player.TWO)

    def test_diagonal_down_left_win(self):
        board = make_board({(2 + i, 6 - i): Player.TWO for i in range(4)}, support=Player.ONE)
        assert has_won(board, Player.TWO)
        assert not has_won(board, Player.ONE)

    def test_run_at_far_corner(self):
        board = make_board({(7 - i, 8 - i): Player.ONE for i in range(4)}, rows=8, cols=9)
        assert has_won(board, Player.ONE)

    def test_five_in_a_row_wins(self):
        board = make_board({(5, c): Player.ONE for c in range(1, 6)})
        assert has_won(board, Player.ONE)

    @pytest.mark.parametrize("dr,dc,start", [
        (0, 1, (5, 0)),
        (1, 0, (3, 3)),
        (1, 1, (3, 0)),
        (1, -1, (3, 6)),
    ])
    def test_three_in_a_row_never_wins(self, dr, dc, start):
        r, c = start
        board = make_board({(r + i * dr, c + i * dc): Player.ONE for i in range(3)})
        assert not has_won(board, Player.ONE)
        assert outcome(board, Player.ONE) is Outcome.NOT_TERMINAL

    def test_interrupted_run(self):
        board = make_board({
            (5, 0): Player.ONE,
            (5, 1): Player.ONE,
            (5, 2): Player.TWO,
            (5, 3): Player.ONE,
            (5, 4): Player.ONE,
        })
        assert not has_won(board, Player.ONE)

    @pytest.mark.parametrize("rows,cols", [(4, 4), (6, 7), (5, 9)])
    def test_matches_reference_on_random_boards(self, rows, cols):
        rng = np.random.default_rng(rows * 100 + cols)
        for _ in range(200):
            cells = rng.integers(1, 3, size=(rows, cols)).astype(np.int8)
            heights = rng.integers(0, rows + 1, size=cols)
            for c, height in enumerate(heights):
                cells[: rows - height, c] = 0
            board = Board(cells=cells)
            for player in Player:
                expected = any(
                    naive_has_run(cells, int(player), dr, dc)
                    for dr, dc in [(0, 1), (1, 0), (1, 1), (1, -1)]
                )
                assert has_won(board, player) == expected

    def test_incremental_check_matches_full_scan(self):
        rng = np.random.default_rng(5)
        for _ in range(30):
            board = new_board()
            player = Player.ONE
            while True:
                moves = legal_moves(board)
                if not moves:
                    break
                column = moves[rng.integers(len(moves))]
                row = landing_row(board, column)
                board = drop(board, column, player)
                won = completes_four(board, row, column, player)
                assert won == has_won(board, player)
                if won:
                    assert winner(board) is player
                    break
                player = player.opponent


class TestOutcome:
    def test_win_and_loss(self):
        board = make_board({(5, c): Player.TWO for c in range(4)})
        assert outcome(board, Player.TWO) is Outcome.WIN
        assert outcome(board, Player.ONE) is Outcome.LOSS
        assert is_terminal(board)

    def test_not_terminal(self):
        board, _ = board_from_moves([3, 3, 4])
        assert outcome(board, Player.ONE) is Outcome.NOT_TERMINAL
        assert not is_terminal(board)

    def test_scores(self):
        assert Outcome.WIN.score == 1.0
        assert Outcome.LOSS.score == -1.0
        assert Outcome.DRAW.score == 0.0
        assert Outcome.NOT_TERMINAL.score == 0.0

    def test_win_takes_precedence_over_full_board(self):
        # Full 4x4 board where player one owns the bottom row
        cells = np.array([
            [2, 1, 2, 1],
            [1, 2, 1, 2],
            [2, 2, 1, 2],
            [1, 1, 1, 1],
        ], dtype=np.int8)
        board = Board(cells=cells)
        assert is_full(board)
        assert not is_draw(board)
        assert outcome(board, Player.ONE) is Outcome.WIN


class TestScenarios:
    def test_four_across_the_bottom(self):
        board = new_board(6, 7)
        for i, column in enumerate([0, 1, 2, 3]):
            assert outcome(board, Player.ONE) is Outcome.NOT_TERMINAL
            board = drop(board, column, Player.ONE)
            if i < 3:
                assert outcome(board, Player.ONE) is not Outcome.WIN
                board = drop(board, 6, Player.TWO)
        assert outcome(board, Player.ONE) is Outcome.WIN
        assert outcome(board, Player.TWO) is Outcome.LOSS

    def test_full_board_draw(self):
        moves = draw_sequence()
        assert len(moves) == 42

        board = new_board(6, 7)
        player = Player.ONE
        for column in moves:
            assert outcome(board, player) is Outcome.NOT_TERMINAL
            board = drop(board, column, player)
            player = player.opponent

        assert outcome(board, Player.ONE) is Outcome.DRAW
        assert outcome(board, Player.TWO) is Outcome.DRAW
        assert legal_moves(board) == []
        assert is_draw(board)
        assert winner(board) is None


class TestBoardValue:
    def test_equality_and_hash(self):
        a, _ = board_from_moves([3, 4, 3])
        b, _ = board_from_moves([3, 4, 3])
        assert a == b
        assert hash(a) == hash(b)
        assert a != new_board()

    def test_board_from_moves_player_to_move(self):
        _, player = board_from_moves([0, 1, 2])
        assert player is Player.TWO
        _, player = board_from_moves([])
        assert player is Player.ONE
