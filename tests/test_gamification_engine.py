# ABOUTME: Tests point, level, and streak rules plus full session recording.
# ABOUTME: Verifies awards are idempotent and input profiles are never mutated.

import unittest
from datetime import datetime, timedelta

import pytest

from src.gamification.engine import GamificationEngine
from src.gamification.profile import StudentProfile, StudySessionRequest, new_profile
from src.gamification.templates import TemplateRegistry

NOW = datetime(2024, 3, 4, 15, 0)


def _session(hours=1.0, focus=0.5, subjects=(), attended=False, name="Ann"):
    return StudySessionRequest(
        student_name=name,
        duration_hours=hours,
        subjects=tuple(subjects),
        focus_score=focus,
        attended_today=attended,
    )


class TestPointsAndLevels(unittest.TestCase):
    def setUp(self):
        self.engine = GamificationEngine()

    def test_points_formula(self):
        session = _session(hours=2.5, focus=0.5, subjects=("Math", "Physics"), attended=True)
        # 25 hours + 10 focus + 10 subjects + 25 attendance + 15 long session
        self.assertEqual(self.engine.calculate_points(session), 85)

    def test_long_session_bonus_needs_more_than_two_hours(self):
        self.assertEqual(self.engine.calculate_points(_session(hours=2.0, focus=0.0)), 20)

    def test_points_never_negative(self):
        self.assertEqual(self.engine.calculate_points(_session(hours=-5.0, focus=0.0)), 0)

    def test_levels_follow_square_root_curve(self):
        self.assertEqual(self.engine.calculate_level(0), 1)
        self.assertEqual(self.engine.calculate_level(99), 1)
        self.assertEqual(self.engine.calculate_level(100), 2)
        self.assertEqual(self.engine.calculate_level(399), 2)
        self.assertEqual(self.engine.calculate_level(400), 3)


class TestStreaks(unittest.TestCase):
    def setUp(self):
        self.engine = GamificationEngine()

    def _profile(self, last_activity, streak=3):
        return StudentProfile(name="Ann", current_streak=streak, longest_streak=streak, last_activity=last_activity)

    def test_first_session_starts_streak(self):
        self.assertEqual(self.engine.next_streak(new_profile("Ann"), NOW), 1)

    def test_same_day_keeps_streak(self):
        self.assertEqual(self.engine.next_streak(self._profile(NOW.replace(hour=8)), NOW), 3)

    def test_next_day_extends_streak(self):
        self.assertEqual(self.engine.next_streak(self._profile(NOW - timedelta(days=1)), NOW), 4)

    def test_gap_resets_streak(self):
        self.assertEqual(self.engine.next_streak(self._profile(NOW - timedelta(days=3)), NOW), 1)

    def test_backdated_session_keeps_streak(self):
        self.assertEqual(self.engine.next_streak(self._profile(NOW + timedelta(days=2)), NOW), 3)


def test_first_session_creates_profile_and_awards():
    engine = GamificationEngine()
    outcome = engine.record_session(None, _session(), now=NOW)

    profile = outcome.updated_profile
    assert profile.name == "Ann"
    assert outcome.points_earned == 20
    assert [b.name for b in outcome.new_badges] == ["First Session"]
    assert [a.name for a in outcome.new_achievements] == ["First Steps"]
    assert outcome.bonus_points == 50
    assert profile.total_points == 70
    assert profile.level == 1
    assert not outcome.level_up
    assert profile.current_streak == 1
    assert profile.last_activity == NOW
    assert len(profile.sessions) == 1
    assert profile.sessions[0].points_earned == 20


def test_awards_are_not_repeated():
    engine = GamificationEngine()
    first = engine.record_session(None, _session(), now=NOW)
    second = engine.record_session(first.updated_profile, _session(), now=NOW + timedelta(hours=2))

    assert second.new_badges == []
    assert second.new_achievements == []
    assert second.bonus_points == 0
    assert second.updated_profile.total_points == 90
    assert second.updated_profile.current_streak == 1
    assert len(second.updated_profile.badges) == 1


def test_input_profile_is_not_mutated():
    engine = GamificationEngine()
    before = engine.record_session(None, _session(), now=NOW).updated_profile
    snapshot = (before.total_points, len(before.sessions), before.badges, before.achievements)

    engine.record_session(before, _session(hours=6.0, subjects=("A", "B", "C")), now=NOW + timedelta(days=1))

    assert (before.total_points, len(before.sessions), before.badges, before.achievements) == snapshot


def test_level_up_includes_achievement_bonus():
    engine = GamificationEngine()
    profile = StudentProfile(name="Ann", total_points=90, level=1)
    outcome = engine.record_session(profile, _session(hours=1.0, focus=0.0), now=NOW)

    assert outcome.points_earned == 10
    assert outcome.bonus_points == 50
    assert outcome.updated_profile.total_points == 150
    assert outcome.updated_profile.level == 2
    assert outcome.level_up


def test_session_badges_for_long_varied_sessions():
    engine = GamificationEngine()
    outcome = engine.record_session(
        None, _session(hours=5.0, subjects=("Math", "Physics", "English")), now=NOW
    )
    names = {b.name for b in outcome.new_badges}
    assert {"First Session", "Marathon Studier", "Subject Explorer"} <= names
    assert "Weekly Champion" not in names


def test_weekly_champion_requires_points_above_threshold():
    engine = GamificationEngine()
    profile = StudentProfile(name="Ann", total_points=600, level=3)
    outcome = engine.record_session(profile, _session(), now=NOW)
    assert "Weekly Champion" in {b.name for b in outcome.new_badges}


def test_longest_streak_is_kept_after_reset():
    engine = GamificationEngine()
    profile = StudentProfile(
        name="Ann", current_streak=5, longest_streak=9, last_activity=NOW - timedelta(days=4)
    )
    outcome = engine.record_session(profile, _session(), now=NOW)
    assert outcome.updated_profile.current_streak == 1
    assert outcome.updated_profile.longest_streak == 9


def test_now_defaults_to_session_timestamp():
    engine = GamificationEngine()
    stamp = datetime(2024, 5, 1, 7, 30)
    session = StudySessionRequest(student_name="Ann", duration_hours=1.0, timestamp=stamp)
    outcome = engine.record_session(None, session)
    assert outcome.updated_profile.last_activity == stamp
    assert outcome.updated_profile.sessions[0].date == stamp


def test_empty_registry_awards_nothing():
    engine = GamificationEngine(TemplateRegistry(achievements=(), badges=()))
    outcome = engine.record_session(None, _session(hours=6.0), now=NOW)
    assert outcome.new_badges == []
    assert outcome.new_achievements == []
    assert outcome.updated_profile.total_points == outcome.points_earned


def test_progress_report_covers_every_achievement():
    engine = GamificationEngine()
    profile = engine.record_session(None, _session(hours=5.0, focus=0.0), now=NOW).updated_profile
    report = {a.name: a for a in engine.achievement_progress_report(profile)}

    assert len(report) == len(engine.registry.achievements)
    assert report["First Steps"].completed
    assert report["Dedicated Learner"].progress == pytest.approx(0.1)
    assert not report["Dedicated Learner"].completed


def test_backdated_session_does_not_rewind_last_activity():
    engine = GamificationEngine()
    latest = datetime(2024, 3, 4, 9, 0)
    profile = StudentProfile(name="Ann", current_streak=5, longest_streak=5, last_activity=latest)

    backdated = engine.record_session(profile, _session(), now=datetime(2024, 3, 2, 12, 0))
    assert backdated.updated_profile.current_streak == 5
    assert backdated.updated_profile.last_activity == latest
    assert len(backdated.updated_profile.sessions) == 1

    same_day = engine.record_session(backdated.updated_profile, _session(), now=latest + timedelta(hours=3))
    assert same_day.updated_profile.current_streak == 5
