# rubik_demo/tests/test_controller.py
import math
import unittest

import numpy as np

from rubik_demo.anim import AnimationController, ShowSolved, Turning
from rubik_demo.core import Move
from rubik_demo.logic import DemoConfig, RandomMoveGenerator, Turn
from rubik_demo.logic.config import ITEM_SPACING

DT = 0.25  # 4 ticks por cuarto de vuelta (exacto en binario)


class ScriptedGenerator:
    """Generador con giros y longitud de mezcla fijos."""

    def __init__(self, turns, length):
        self.turns = list(turns)
        self.length = length
        self.exclusions = []

    def next(self, exclude_cancel_of=None):
        self.exclusions.append(exclude_cancel_of)
        return self.turns.pop(0)

    def scramble_length(self, min_steps, max_steps):
        return self.length


def run_until_solved(ctrl, start=3.0, max_ticks=10000):
    """Avanza ticks de DT segundos hasta completar un ciclo. Retorna el tiempo final."""
    now = start
    cycles = ctrl.cycles
    for _ in range(max_ticks):
        ctrl.tick(now, DT)
        if ctrl.cycles > cycles:
            return now
        now += DT
    raise AssertionError("el ciclo no terminó")


class TestAnimationController(unittest.TestCase):
    def test_starts_showing_solved(self):
        ctrl = AnimationController(config=DemoConfig(seed=1))
        self.assertEqual(ctrl.state, ShowSolved(0.0))
        self.assertEqual(ctrl.phase, "solved")
        frame = ctrl.frame()
        self.assertFalse(frame.is_turning)
        self.assertEqual(frame.direction, 0)
        self.assertEqual(len(frame.poses), 26)
        self.assertTrue(all(not p.on_active_layer and p.turn_delta is None for p in frame.poses))

    def test_dwell_is_respected(self):
        ctrl = AnimationController(config=DemoConfig(seed=1))
        now = 0.0
        while now < 2.9:
            ctrl.tick(now, 0.1)
            now += 0.1
        self.assertIsInstance(ctrl.state, ShowSolved)
        self.assertEqual(ctrl.scramble_remaining, 0)
        self.assertTrue(ctrl.model.is_solved())

    def test_dwell_expiry_starts_scramble(self):
        ctrl = AnimationController(config=DemoConfig(seed=1))
        ctrl.tick(3.0, 0.0)
        self.assertIsInstance(ctrl.state, Turning)
        self.assertEqual(ctrl.state.progress, 0.0)
        self.assertTrue(4 <= ctrl.scramble_remaining <= 15)
        self.assertEqual(ctrl.scramble_remaining, ctrl.scramble_length)
        self.assertEqual(ctrl.phase, "scrambling")

    def test_first_turn_has_no_exclusion(self):
        gen = ScriptedGenerator([Turn(Move.TOP, 1), Turn(Move.LEFT, -1)], length=2)
        ctrl = AnimationController(generator=gen)
        ctrl.tick(3.0, 0.0)
        self.assertEqual(gen.exclusions, [None])

    def test_progress_accumulates_with_direction(self):
        gen = ScriptedGenerator([Turn(Move.FRONT, -1)], length=4)
        ctrl = AnimationController(generator=gen)
        ctrl.tick(3.0, 0.0)
        ctrl.tick(3.25, 0.25)
        ctrl.tick(3.5, 0.25)
        self.assertEqual(ctrl.state, Turning(Move.FRONT, -1, -0.5))
        self.assertTrue(ctrl.model.is_solved())

    def test_rate_scales_progress(self):
        gen = ScriptedGenerator([Turn(Move.TOP, 1)], length=4)
        ctrl = AnimationController(generator=gen, config=DemoConfig(rate=2.0))
        ctrl.tick(3.0, 0.25)
        self.assertEqual(ctrl.state.progress, 0.5)

    def test_commit_then_next_turn_excludes_cancel(self):
        first = Turn(Move.RIGHT, 1)
        gen = ScriptedGenerator([first, Turn(Move.TOP, -1)], length=3)
        ctrl = AnimationController(generator=gen)
        for i in range(5):
            ctrl.tick(3.0 + i * DT, DT if i else 0.0)
        # 4 ticks de 0.25 => giro completo
        self.assertEqual(ctrl.history, [first])
        self.assertEqual(ctrl.scramble_remaining, 2)
        self.assertEqual(gen.exclusions, [None, first])
        self.assertEqual(ctrl.state, Turning(Move.TOP, -1, 0.0))
        self.assertFalse(ctrl.model.is_solved())

    def test_active_layer_flags(self):
        gen = ScriptedGenerator([Turn(Move.BOTTOM, 1)], length=4)
        ctrl = AnimationController(generator=gen)
        frame = ctrl.tick(3.0, 0.5)
        self.assertIs(frame.active_move, Move.BOTTOM)
        self.assertEqual(frame.direction, 1)
        self.assertEqual(frame.progress, 0.5)
        active = [p for p in frame.poses if p.on_active_layer]
        self.assertEqual(len(active), 9)
        for p in frame.poses:
            self.assertEqual(p.on_active_layer, p.position[1] == -1)
            if p.on_active_layer:
                self.assertEqual(p.turn_delta.axis, 1)
                self.assertEqual(p.turn_delta.fraction, -0.5)
            else:
                self.assertIsNone(p.turn_delta)

    def test_interpolation_matches_commit(self):
        gen = ScriptedGenerator([Turn(Move.RIGHT, 1), Turn(Move.TOP, 1)], length=4)
        ctrl = AnimationController(generator=gen)
        frame = ctrl.tick(3.0, 0.5)
        pose = next(p for p in frame.poses if p.position == (1, 1, 0))
        half = math.sqrt(2.0)
        self.assertTrue(np.allclose(pose.translation(2.0), [2.0, half, half]))
        self.assertAlmostEqual(pose.turn_delta.angle_deg, 45.0)

        # Al completar, la pieza termina donde apuntaba la interpolación.
        num = pose.num
        ctrl.tick(3.75, 0.5)
        self.assertEqual(ctrl.model[num].position, [1, 0, 1])
        settled = next(p for p in ctrl.frame().poses if p.num == num)
        self.assertTrue(np.allclose(settled.world_rotation(), ctrl.model[num].rotation))

    def test_large_dt_commits_single_turn(self):
        gen = ScriptedGenerator([Turn(Move.LEFT, 1), Turn(Move.TOP, 1)], length=4)
        ctrl = AnimationController(generator=gen)
        ctrl.tick(3.0, 5.0)
        self.assertEqual(len(ctrl.history), 1)
        self.assertEqual(ctrl.state.progress, 0.0)

    def test_scramble_of_five_then_solved(self):
        lengths = []
        commits = []

        def on_commit(turn, history_len):
            commits.append(turn)
            lengths.append(history_len)

        ctrl = AnimationController(config=DemoConfig(min_steps=5, max_steps=5, seed=21), on_commit=on_commit)
        end = run_until_solved(ctrl)

        self.assertEqual(lengths, [1, 2, 3, 4, 5, 4, 3, 2, 1, 0])
        self.assertEqual(ctrl.history, [])
        self.assertEqual(ctrl.state, ShowSolved(end))
        self.assertTrue(ctrl.model.is_solved())
        self.assertEqual(ctrl.model.positions(), sorted(item.original_position for item in ctrl.model))

        scramble, reversal = commits[:5], commits[5:]
        self.assertEqual(reversal, [t.inverse() for t in reversed(scramble)])

    def test_many_cycles_return_to_solved(self):
        commits = []
        ctrl = AnimationController(
            config=DemoConfig(seed=8),
            on_commit=lambda turn, n: commits.append(turn),
        )
        now = 3.0
        for cycle in range(1, 6):
            commits.clear()
            end = run_until_solved(ctrl, start=now)
            n = ctrl.scramble_length
            self.assertTrue(4 <= n <= 15)
            self.assertEqual(len(commits), 2 * n)
            for a, b in zip(commits[: n - 1], commits[1:n]):
                self.assertFalse(a.cancels(b))
            self.assertEqual(ctrl.cycles, cycle)
            self.assertTrue(ctrl.model.is_solved())
            for item in ctrl.model:
                self.assertAlmostEqual(float(np.linalg.norm(item.rotation)), 1.0, places=12)
            now = end + ctrl.config.dwell

    def test_history_never_exceeds_scramble_length(self):
        ctrl = AnimationController(config=DemoConfig(seed=17))
        now = 3.0
        while ctrl.cycles == 0:
            ctrl.tick(now, 0.1)
            self.assertLessEqual(len(ctrl.history), ctrl.scramble_length)
            now += 0.1

    def test_dwell_restarts_after_solve(self):
        ctrl = AnimationController(config=DemoConfig(min_steps=4, max_steps=4, seed=2))
        end = run_until_solved(ctrl)
        ctrl.tick(end + 1.0, 1.0)
        self.assertIsInstance(ctrl.state, ShowSolved)
        ctrl.tick(end + 3.0, 2.0)
        self.assertIsInstance(ctrl.state, Turning)

    def test_seeded_runs_are_deterministic(self):
        def record(seed):
            out = []
            ctrl = AnimationController(
                generator=RandomMoveGenerator(seed=seed),
                on_commit=lambda turn, n: out.append(turn),
            )
            run_until_solved(ctrl)
            return out

        self.assertEqual(record(31), record(31))

    def test_commit_listeners_are_chained(self):
        first, added = [], []
        gen = ScriptedGenerator([Turn(Move.RIGHT, 1), Turn(Move.TOP, 1)], length=2)
        ctrl = AnimationController(generator=gen, on_commit=lambda turn, n: first.append((turn, n)))
        ctrl.add_commit_listener(lambda turn, n: added.append((turn, n)))
        ctrl.tick(3.0, 1.0)
        self.assertEqual(first, [(Turn(Move.RIGHT, 1), 1)])
        self.assertEqual(added, first)

    def test_frame_carries_phase(self):
        gen = ScriptedGenerator([Turn(Move.BACK, 1)], length=1)
        ctrl = AnimationController(generator=gen)
        self.assertEqual(ctrl.frame().phase, "solved")
        frame = ctrl.tick(3.0, 0.0)
        self.assertEqual(frame.phase, "scrambling")
        # Un solo giro de mezcla: al confirmarlo empieza la resolución.
        frame = ctrl.tick(3.25, 1.0)
        self.assertEqual(frame.phase, "solving")
        self.assertEqual(frame.phase, ctrl.phase)

    def test_translation_uses_item_spacing(self):
        ctrl = AnimationController(config=DemoConfig(seed=1))
        pose = next(p for p in ctrl.frame().poses if p.num == 25)
        self.assertTrue(np.allclose(pose.translation(), pose.translation(ITEM_SPACING)))
        self.assertTrue(np.allclose(pose.translation(), [2.0, 2.0, 2.0]))

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            AnimationController(config=DemoConfig(min_steps=6, max_steps=2))


if __name__ == "__main__":
    unittest.main()
