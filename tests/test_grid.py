import unittest

from crossgrid.core.constants import Direction
from crossgrid.core.models import Placement, Point
from crossgrid.engine.grid import Grid
from crossgrid.utils.pretty import CapturingRenderer

H = Direction.HORIZONTAL
V = Direction.VERTICAL


def room_omega_grid() -> Grid:
    grid = Grid()
    grid.place_word(Placement("ROOM", Point(0, 0), H))
    grid.place_word(Placement("OMEGA", Point(1, 0), V))
    return grid


class CanPlaceTests(unittest.TestCase):
    def test_empty_grid_accepts_any_origin_and_direction(self) -> None:
        grid = Grid()
        for origin in (Point(0, 0), Point(-7, 3), Point(100, -100)):
            for direction in (H, V):
                self.assertTrue(grid.can_place(Placement("ROOM", origin, direction)))

    def test_letter_conflict(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ALL", Point(0, 0), V))
        self.assertFalse(grid.can_place(Placement("ROOM", Point(0, 0), H)))

    def test_correct_intersection(self) -> None:
        grid = Grid()
        grid.place_word(Placement("OMEGA", Point(0, 0), H))
        self.assertTrue(grid.can_place(Placement("ROOM", Point(0, -1), V)))

    def test_perpendicular_conflict(self) -> None:
        grid = Grid()
        grid.place_word(Placement("XENON", Point(0, 1), H))
        self.assertFalse(grid.can_place(Placement("ROOM", Point(0, 0), H)))

    def test_empty_cell_with_perpendicular_neighbour_rejected(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        grid.place_word(Placement("OMEGA", Point(1, 0), V))
        # ME crosses OMEGA's M, but its E would sit right under ROOM's second O.
        self.assertFalse(grid.can_place(Placement("ME", Point(1, 1), H)))

    def test_cell_before_start_occupied(self) -> None:
        grid = Grid()
        grid.place_word(Placement("X", Point(-1, 0), H))
        self.assertFalse(grid.can_place(Placement("ROOM", Point(0, 0), H)))

    def test_cell_after_end_occupied(self) -> None:
        grid = Grid()
        grid.place_word(Placement("X", Point(4, 0), H))
        self.assertFalse(grid.can_place(Placement("ROOM", Point(0, 0), H)))

    def test_extending_existing_word_rejected(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        self.assertFalse(grid.can_place(Placement("MATE", Point(4, 0), H)))
        self.assertFalse(grid.can_place(Placement("BAR", Point(-3, 0), H)))

    def test_running_along_existing_word_rejected(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        self.assertFalse(grid.can_place(Placement("ROOM", Point(0, 0), H)))
        self.assertFalse(grid.can_place(Placement("OOZE", Point(1, 0), H)))

    def test_intersection_is_mandatory_once_non_empty(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        self.assertFalse(grid.can_place(Placement("OMEGA", Point(0, 5), H)))
        self.assertFalse(grid.can_place(Placement("OMEGA", Point(10, 10), V)))

    def test_empty_word_rejected(self) -> None:
        self.assertFalse(Grid().can_place(Placement("", Point(0, 0), H)))


class PlaceAndRemoveTests(unittest.TestCase):
    def test_place_word_writes_letters_and_history(self) -> None:
        grid = room_omega_grid()
        self.assertEqual(grid.words, ["ROOM", "OMEGA"])
        self.assertEqual(grid.letter_at(1, 0), "O")
        self.assertEqual(grid.letter_at(1, 4), "A")
        self.assertEqual(len(grid), 8)

    def test_rejected_placement_leaves_grid_untouched(self) -> None:
        grid = room_omega_grid()
        before = grid.copy()
        self.assertFalse(grid.place_word(Placement("CAT", Point(20, 20), H)))
        self.assertEqual(grid, before)
        self.assertEqual(grid.words, before.words)

    def test_remove_word_keeps_shared_cells(self) -> None:
        grid = room_omega_grid()
        omega = Placement("OMEGA", Point(1, 0), V)
        self.assertTrue(grid.remove_word(omega))
        self.assertEqual(grid.words, ["ROOM"])
        self.assertEqual(grid.letter_at(1, 0), "O")
        self.assertIsNone(grid.letter_at(1, 1))
        self.assertEqual(grid.area(), 4)
        self.assertEqual(grid.canonical_hash(), "ROOM|#ROOM")

    def test_remove_unknown_word_is_noop(self) -> None:
        grid = room_omega_grid()
        self.assertFalse(grid.remove_word(Placement("ROOM", Point(5, 5), H)))
        self.assertEqual(len(grid), 8)


class PositionsListTests(unittest.TestCase):
    def test_empty_grid_yields_single_origin_candidate(self) -> None:
        self.assertEqual(
            Grid().positions_list("ALPHA"),
            [Placement("ALPHA", Point(0, 0), H)],
        )

    def test_candidates_sorted_by_position_score(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        self.assertEqual(
            grid.positions_list("OMEGA"),
            [
                Placement("OMEGA", Point(1, 0), V),
                Placement("OMEGA", Point(2, 0), V),
                Placement("OMEGA", Point(3, -1), V),
            ],
        )

    def test_ranking_unchanged_by_translation(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(-10, 0), H))
        self.assertEqual(
            grid.positions_list("OMEGA"),
            [
                Placement("OMEGA", Point(-9, 0), V),
                Placement("OMEGA", Point(-8, 0), V),
                Placement("OMEGA", Point(-7, -1), V),
            ],
        )

    def test_no_shared_letters_yields_nothing(self) -> None:
        grid = Grid()
        grid.place_word(Placement("CAT", Point(0, 0), H))
        self.assertEqual(grid.positions_list("DOG"), [])

    def test_list_is_restartable(self) -> None:
        grid = room_omega_grid()
        self.assertEqual(grid.positions_list("MORE"), grid.positions_list("MORE"))

    def test_every_candidate_is_placeable_and_unique(self) -> None:
        grid = room_omega_grid()
        candidates = grid.positions_list("MOM")
        self.assertEqual(len(candidates), len(set(candidates)))
        for candidate in candidates:
            self.assertTrue(grid.can_place(candidate))


class StatisticsTests(unittest.TestCase):
    def test_empty_grid_statistics(self) -> None:
        grid = Grid()
        self.assertEqual(grid.area(), 0)
        self.assertEqual(grid.density(), 0.0)
        self.assertEqual(grid.intersections(), 0)

    def test_single_word(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ALPHA", Point(0, 0), H))
        self.assertEqual(grid.area(), 5)
        self.assertEqual(grid.density(), 1.0)
        self.assertEqual(grid.intersections(), 0)

    def test_crossing_words(self) -> None:
        grid = room_omega_grid()
        self.assertEqual(grid.area(), 20)
        self.assertAlmostEqual(grid.density(), 0.4)
        self.assertEqual(grid.intersections(), 1)


class CanonicalFormTests(unittest.TestCase):
    def test_hash_layout(self) -> None:
        self.assertEqual(
            room_omega_grid().canonical_hash(),
            "ROOM|.M..|.E..|.G..|.A..|#OMEGA,ROOM",
        )

    def test_empty_grid_hash(self) -> None:
        self.assertEqual(Grid().canonical_hash(), "")
        self.assertTrue(Grid().normalize().is_empty)

    def test_hash_normalized(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ATTRIBUTE", Point(20, 20), V))
        self.assertTrue(grid.place_word(Placement("ATTITUDE", Point(20, 20), H)))
        self.assertEqual(grid.canonical_hash(), grid.normalize().canonical_hash())

    def test_normalize_moves_bounding_box_to_origin(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(-4, 7), H))
        self.assertTrue(grid.place_word(Placement("OMEGA", Point(-1, 6), V)))
        normalized = grid.normalize()
        min_x, _, min_y, _ = normalized.bounds()
        self.assertEqual((min_x, min_y), (0, 0))
        self.assertEqual(normalized.placements[0].origin, Point(0, 1))
        self.assertEqual(normalized.placements[1].origin, Point(3, 0))

    def test_translation_and_order_invariance(self) -> None:
        first = room_omega_grid()
        second = Grid()
        second.place_word(Placement("OMEGA", Point(5, 5), V))
        second.place_word(Placement("ROOM", Point(4, 5), H))
        self.assertEqual(first.canonical_hash(), second.canonical_hash())
        self.assertNotEqual(first, second)
        self.assertEqual(first, second.normalize())

    def test_equality_ignores_history(self) -> None:
        first = room_omega_grid()
        second = Grid()
        second.place_word(Placement("OMEGA", Point(1, 0), V))
        second.place_word(Placement("ROOM", Point(0, 0), H))
        self.assertEqual(first, second)
        self.assertNotEqual(first.words, second.words)

    def test_grid_is_unhashable(self) -> None:
        with self.assertRaises(TypeError):
            hash(Grid())
        self.assertIsInstance(room_omega_grid().canonical_hash(), str)

    def test_copy_is_independent(self) -> None:
        grid = Grid()
        grid.place_word(Placement("ROOM", Point(0, 0), H))
        grid.score = 3.5
        duplicate = grid.copy()
        duplicate.place_word(Placement("OMEGA", Point(1, 0), V))
        duplicate.score = 1.0
        self.assertEqual(grid.words, ["ROOM"])
        self.assertEqual(len(grid), 4)
        self.assertEqual(grid.score, 3.5)


class RenderTests(unittest.TestCase):
    def test_render_rows_and_line_breaks(self) -> None:
        renderer = CapturingRenderer()
        room_omega_grid().render(renderer)
        self.assertTrue(renderer.finished)
        self.assertEqual(renderer.text, "ROOM\n.M..\n.E..\n.G..\n.A..\n")
        self.assertEqual(renderer.calls[:5], [
            (0, 0, "R"), (1, 0, "O"), (2, 0, "O"), (3, 0, "M"), (4, 0, "\n"),
        ])
        self.assertEqual(len(renderer.calls), 25)

    def test_render_empty_grid_only_finishes(self) -> None:
        renderer = CapturingRenderer()
        Grid().render(renderer)
        self.assertEqual(renderer.calls, [])
        self.assertTrue(renderer.finished)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
