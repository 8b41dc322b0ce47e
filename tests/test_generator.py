"""
Tests for level generation.

Covers word list validation, placement of pairs, the planted obfuscation
swap, and the structured errors returned for bad input.
"""

from collections import Counter

import pytest
from src.engine import Grid, Position, evaluate_swap
from src.generator import (
    generate,
    parse_words,
    validate_words,
    GeneratorConfig,
    EMPTY_WORD_LIST,
    ODD_WORD_COUNT,
    WORD_TOO_SHORT,
    WORD_TOO_LONG,
    INVALID_CHARACTERS,
    DUPLICATE_WORDS,
    PLACEMENT_EXHAUSTED,
    PlacementPlan,
    check_layout,
)
from src.generator.placement import shift_column, cross_pairs, word_positions
from src.generator.verify import stray_words


EIGHT_WORDS = ["CAT", "DOG", "SUN", "PIG", "COW", "BEAR", "LION", "FROG"]


def _legal_swaps(grid, words):
    """Every orthogonal swap on the grid that is legal for `words`."""
    found = []
    for pos in grid.letter_positions():
        for other in ((pos.row, pos.col + 1), (pos.row + 1, pos.col)):
            if not grid.is_letter(other):
                continue
            result = evaluate_swap(grid, pos, other, words)
            if result.legal:
                found.append((pos, other, result))
    return found


def _columns_are_settled(rows):
    """No letter floats above an empty cell in its column."""
    for col in range(len(rows[0])):
        column = [row[col] for row in rows]
        seen_letter = False
        for ch in column:
            if ch != ' ':
                seen_letter = True
            elif seen_letter:
                return False
    return True


class TestParseWords:
    def test_mixed_separators(self):
        assert parse_words("cat, dog\nsun;hat  pig") == ["CAT", "DOG", "SUN", "HAT", "PIG"]

    def test_blank_input(self):
        assert parse_words("  \n ") == []


class TestValidation:
    """Word lists rejected before placement."""

    def test_empty(self):
        result = generate([])
        assert result.success is False
        assert result.error.code == EMPTY_WORD_LIST
        assert result.error.is_invalid_word_list

    def test_odd_count(self):
        result = generate(["CAT", "DOG", "SUN"])
        assert result.success is False
        assert result.error.code == ODD_WORD_COUNT

    def test_too_short(self):
        result = generate(["AT", "DOG"])
        assert result.error.code == WORD_TOO_SHORT
        assert result.error.words == ["AT"]

    def test_too_long_for_grid(self):
        result = generate(["ELEPHANT", "DOG"], grid_size=5)
        assert result.error.code == WORD_TOO_LONG
        assert result.error.words == ["ELEPHANT"]

    def test_invalid_characters(self):
        error = validate_words(["CAT", "D0G"], 20)
        assert error.code == INVALID_CHARACTERS
        assert error.words == ["D0G"]

    def test_duplicate_words(self):
        """A repeated word could never count as two distinct words."""
        result = generate(["cat", "CAT"])
        assert result.error.code == DUPLICATE_WORDS
        assert result.error.words == ["CAT"]
        assert result.error.is_invalid_word_list

    def test_valid_list(self):
        assert validate_words(["CAT", "DOG"], 20) is None

    def test_no_grid_for_errors(self):
        result = generate(["CAT"])
        assert result.grid == []
        assert result.valid_words == []


class TestConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.grid_size == 20
        assert config.max_attempts == 1000
        assert config.seed is None

    def test_grid_size_bounds(self):
        with pytest.raises(ValueError):
            GeneratorConfig(grid_size=2)

    def test_grid_size_override_is_validated(self):
        with pytest.raises(ValueError):
            generate(["CAT", "DOG"], grid_size=0)


class TestSinglePair:
    """A single pair always leaves exactly the planted solution."""

    @pytest.mark.parametrize("seed", range(8))
    def test_cat_dog_is_solvable(self, seed):
        result = generate(["CAT", "DOG"], seed=seed)
        assert result.success is True
        assert len(result.grid) == 20
        assert all(len(row) == 20 for row in result.grid)

        grid = Grid.from_rows(result.grid)
        legal = _legal_swaps(grid, result.valid_words)
        assert legal
        assert any(set(r.words_found) >= {"CAT", "DOG"} for _, _, r in legal)

    @pytest.mark.parametrize("seed", range(8))
    def test_words_start_obfuscated(self, seed):
        """Neither word can be read off the fresh grid."""
        result = generate(["CAT", "DOG"], seed=seed)
        text = "\n".join(result.grid)
        columns = "\n".join("".join(col) for col in zip(*result.grid))
        for word in ("CAT", "DOG"):
            assert word not in text
            assert word not in columns

    def test_planted_swap_is_legal(self):
        result = generate(["CAT", "DOG"], seed=3)
        a, b = result.placements[0].swap
        outcome = evaluate_swap(Grid.from_rows(result.grid), a, b, ["CAT", "DOG"])
        assert outcome.legal

    def test_dictionary_is_the_word_list(self):
        result = generate(["cat", "dog"], seed=1)
        assert result.valid_words == ["CAT", "DOG"]


class TestManyPairs:
    WORDS = ["CAT", "DOG", "SUN", "FOX", "PIG", "COW"]

    @pytest.mark.parametrize("seed", range(5))
    def test_all_letters_kept(self, seed):
        result = generate(self.WORDS, seed=seed)
        assert result.success is True
        letters = Counter(ch for row in result.grid for ch in row if ch != ' ')
        assert letters == Counter("".join(self.WORDS))

    @pytest.mark.parametrize("seed", range(5))
    def test_grid_is_settled(self, seed):
        result = generate(self.WORDS, seed=seed)
        assert _columns_are_settled(result.grid)

    @pytest.mark.parametrize("seed", range(5))
    def test_last_pair_solvable_first(self, seed):
        result = generate(self.WORDS, seed=seed)
        assert len(result.placements) == 3
        a, b = result.placements[-1].swap
        outcome = evaluate_swap(Grid.from_rows(result.grid), a, b, self.WORDS)
        assert outcome.legal
        assert set(result.placements[-1].words) <= set(outcome.words_found)

    def test_seed_reproducible(self):
        first = generate(self.WORDS, seed=11)
        second = generate(self.WORDS, seed=11)
        assert first.grid == second.grid

    def test_input_list_untouched(self):
        words = list(self.WORDS)
        generate(words, seed=2)
        assert words == self.WORDS


class TestExhaustion:
    def test_identical_letters_cannot_be_obfuscated(self):
        """No cross pair with differing letters means no placement."""
        result = generate(["AAA", "AAAA"], seed=0, max_attempts=20)
        assert result.success is False
        assert result.error.code == PLACEMENT_EXHAUSTED
        assert sorted(result.error.words) == ["AAA", "AAAA"]
        assert not result.error.is_invalid_word_list

    def test_canvas_too_small_for_second_pair(self):
        result = generate(["CAT", "DOG", "SUN", "PIG"], grid_size=3, seed=0, max_attempts=50)
        assert result.success is False
        assert result.error.code == PLACEMENT_EXHAUSTED
        assert len(result.placements) == 1
        assert len(result.error.words) == 2


class TestDebugSteps:
    def test_steps_recorded(self):
        result = generate(["CAT", "DOG", "SUN", "PIG"], seed=4, record_steps=True)
        descriptions = [s.description for s in result.steps]
        assert descriptions[0] == "Initial empty grid"
        assert descriptions[-1] == "Final grid"
        assert any(h.mark == 'swap' for s in result.steps for h in s.highlights)

    def test_no_steps_by_default(self):
        result = generate(["CAT", "DOG"], seed=4)
        assert result.steps == []


class TestPlacementHelpers:
    def test_shift_column_pushes_letters_up(self):
        canvas = [list(" "), list("A"), list("B")]
        new = word_positions("X", 2, 0, 'H')
        assert shift_column(canvas, 0, new) is True
        assert [row[0] for row in canvas] == ["A", "B", " "]

    def test_shift_column_overflow(self):
        canvas = [list("A"), list("B")]
        assert shift_column(canvas, 0, word_positions("X", 1, 0, 'H')) is False
        assert [row[0] for row in canvas] == ["A", "B"]

    def test_cross_pairs_skip_equal_letters(self):
        canvas = [list("CAT"), list("DAG")]
        pairs = cross_pairs(canvas, word_positions("CAT", 0, 0, 'H'), word_positions("DAG", 1, 0, 'H'))
        assert [(tuple(a), tuple(b)) for a, b in pairs] == [((0, 0), (1, 0)), ((0, 2), (1, 2))]

    def test_shift_column_records_moves(self):
        canvas = [list(" "), list("A"), list("B")]
        moves = {}
        shift_column(canvas, 0, word_positions("X", 2, 0, 'H'), moves)
        assert moves == {Position(1, 0): Position(0, 0), Position(2, 0): Position(1, 0)}


def _cat_dog_plan():
    return PlacementPlan(
        words=("CAT", "DOG"),
        orientation='H',
        word1_positions=word_positions("CAT", 0, 0, 'H'),
        word2_positions=word_positions("DOG", 1, 0, 'H'),
        swap=(Position(0, 1), Position(1, 1)),
    )


class TestCheckLayout:
    """Rejecting layouts that cannot be solved pair by pair."""

    def test_solvable_layout(self):
        assert check_layout(["COT", "DAG"], [_cat_dog_plan()], ["CAT", "DOG"]) is None

    def test_readable_word_rejected(self):
        problem = check_layout(["COT SUN", "DAG    "], [_cat_dog_plan()], ["CAT", "DOG", "SUN"])
        assert "SUN" in problem

    def test_extra_word_on_solve_rejected(self):
        """Restoring CAT also spells CATS, which would clear a foreign letter."""
        problem = check_layout(["COTS", "DAG "], [_cat_dog_plan()], ["CAT", "DOG", "CATS"])
        assert problem is not None

    def test_split_pair_rejected(self):
        """The planted tiles must still be neighbours."""
        plan = _cat_dog_plan().model_copy(update={"swap": (Position(0, 1), Position(1, 2))})
        assert check_layout(["COT", "DAG"], [plan], ["CAT", "DOG"]) is not None


class TestEveryPair:
    """Every placed pair keeps a legal planted swap in the finished grid."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 22, 30])
    def test_planted_swaps_legal(self, seed):
        result = generate(EIGHT_WORDS, seed=seed)
        assert result.success is True
        assert len(result.placements) == 4

        grid = Grid.from_rows(result.grid)
        for plan in result.placements:
            a, b = plan.swap
            outcome = evaluate_swap(grid, a, b, EIGHT_WORDS)
            assert outcome.legal
            assert set(plan.words) <= set(outcome.words_found)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 22, 30])
    def test_no_words_readable(self, seed):
        result = generate(EIGHT_WORDS, seed=seed)
        assert stray_words(Grid.from_rows(result.grid), EIGHT_WORDS) == []

    @pytest.mark.parametrize("seed", [0, 22, 30])
    def test_check_layout_accepts_result(self, seed):
        result = generate(EIGHT_WORDS, seed=seed)
        assert check_layout(result.grid, result.placements, EIGHT_WORDS) is None
