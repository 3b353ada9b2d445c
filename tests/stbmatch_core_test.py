"""Unit tests for the DA-STB steps"""

import os
import sys
sys.path.insert(0, os.path.abspath('..'))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import unittest

import stbmatch
from stbmatch import core

from common import StepRandomSource, LastRandomSource


def names(pas):
  return [pa.name for pa in pas]


class TestPriorityApplicant(unittest.TestCase):
  def test_compare_by_rank(self):
    a = core.PriorityApplicant(stbmatch.Applicant("Zed"), 0)
    b = core.PriorityApplicant(stbmatch.Applicant("Amy"), 1)
    self.assertLess(a, b)
    self.assertEqual(sorted([b, a]), [a, b])
    self.assertNotEqual(a, b)

  def test_next_preference_keeps_applicant(self):
    cooking = stbmatch.Slot("Cooking", 1)
    reading = stbmatch.Slot("Reading", 1)
    bert = stbmatch.Applicant("Bert", [cooking, reading])
    pa = core.PriorityApplicant(bert, 0)
    self.assertEqual(pa.next_preference(), cooking)
    self.assertEqual(pa.next_preference(), reading)
    self.assertIsNone(pa.next_preference())
    self.assertIsNone(pa.next_preference())
    self.assertEqual(bert.preferences, (cooking, reading))


class TestSteps(unittest.TestCase):
  def setUp(self):
    self.cooking = stbmatch.Slot("Cooking", 3)
    self.reading = stbmatch.Slot("Reading", 2)
    self.walking = stbmatch.Slot("Walking", 1)
    self.slots = [self.cooking, self.reading, self.walking]

  def pa(self, name, rank, preferences=(), exclude=()):
    return core.PriorityApplicant(
        stbmatch.Applicant(name, preferences, exclude), rank)

  def test_draw_order(self):
    applicants = [stbmatch.Applicant(n) for n in ("Bert", "Kate", "Harry")]
    order = core.draw_order(applicants, StepRandomSource())
    self.assertListEqual(names(order), ["Kate", "Harry", "Bert"])
    self.assertListEqual([pa.rank for pa in order], [0, 1, 2])
    # caller's list is left alone
    self.assertListEqual([a.name for a in applicants], ["Bert", "Kate", "Harry"])

  def test_place_applicants(self):
    bert = self.pa("Bert", 0, [self.cooking, self.reading, self.walking])
    kate = self.pa("Kate", 1, [self.walking])
    suze = self.pa("Suze", 2, [self.walking, self.cooking])
    harry = self.pa("Harry", 3)

    placed, not_placable = {}, []
    core.place_applicants([bert, kate, suze, harry], placed, not_placable)

    self.assertDictEqual(
        {k: names(v) for k, v in placed.items()},
        {"Cooking": ["Bert"], "Walking": ["Kate", "Suze"]})
    self.assertListEqual(names(not_placable), ["Harry"])
    self.assertListEqual([bert.cursor, kate.cursor, suze.cursor, harry.cursor],
                         [1, 1, 1, 0])

  def test_place_applicants_with_exclude(self):
    bert = self.pa("Bert", 0, [self.cooking, self.reading])
    kate = self.pa("Kate", 1, [self.cooking, self.reading],
                   exclude=[self.cooking])

    placed, not_placable = {}, []
    core.place_applicants([bert, kate], placed, not_placable)

    self.assertDictEqual({k: names(v) for k, v in placed.items()},
                         {"Cooking": ["Bert"]})
    self.assertListEqual(names(not_placable), ["Kate"])
    # the excluded preference is spent, never retried
    self.assertEqual(kate.cursor, 1)

  def test_truncate_slots(self):
    bert = self.pa("Bert", 0, [self.reading, self.walking])
    kate = self.pa("Kate", 1)
    suze = self.pa("Suze", 2, [self.cooking])
    harry = self.pa("Harry", 3, [self.walking])
    placed = {"Cooking": [bert], "Walking": [harry, kate, suze]}

    evicted = core.truncate_slots(placed, self.slots)

    self.assertListEqual(names(evicted), ["Suze", "Harry"])
    self.assertListEqual(names(placed["Walking"]), ["Kate"])
    self.assertListEqual(names(placed["Cooking"]), ["Bert"])

  def test_truncate_slots_at_capacity(self):
    a, b = self.pa("A", 1), self.pa("B", 0)
    placed = {"Reading": [a, b]}
    self.assertListEqual(core.truncate_slots(placed, self.slots), [])
    self.assertListEqual(names(placed["Reading"]), ["A", "B"])

  def test_deferred_acceptance(self):
    suze = self.pa("Suze", 0, [self.walking, self.cooking])
    kate = self.pa("Kate", 1, [self.walking, self.reading])
    harry = self.pa("Harry", 2, [self.walking], exclude=[self.cooking])
    lisa = self.pa("Lisa", 3)
    bert = self.pa("Bert", 4, [self.cooking, self.reading, self.walking])

    placed, not_placable = core.deferred_acceptance(
        [suze, kate, harry, lisa, bert], self.slots)

    self.assertDictEqual(
        {k: names(v) for k, v in placed.items()},
        {"Walking": ["Suze"], "Reading": ["Kate"], "Cooking": ["Bert"]})
    self.assertListEqual(names(not_placable), ["Lisa", "Harry"])

  def test_assign_random(self):
    bert = self.pa("Bert", 0, [self.cooking, self.reading, self.walking])
    kate = self.pa("Kate", 1, [self.walking])
    suze = self.pa("Suze", 2, [self.walking, self.cooking])
    harry = self.pa("Harry", 3)
    placed = {"Cooking": [bert], "Walking": [kate, suze]}

    rng = StepRandomSource()
    not_placable = core.assign_random([harry], placed, self.slots, rng)

    self.assertListEqual(not_placable, [])
    self.assertListEqual(names(placed["Cooking"]), ["Bert", "Harry"])
    self.assertListEqual(rng.choices, [["Cooking", "Reading"]])

  def test_assign_random_full(self):
    cooking = stbmatch.Slot("Cooking", 1)
    reading = stbmatch.Slot("Reading", 1)
    walking = stbmatch.Slot("Walking", 2)
    placed = {"Cooking": [self.pa("Bert", 0)],
              "Walking": [self.pa("Kate", 1)],
              "Reading": [self.pa("Suze", 2)]}
    harry, lisa = self.pa("Harry", 3), self.pa("Lisa", 4)

    # handed over in the wrong order on purpose: rank decides
    not_placable = core.assign_random(
        [lisa, harry], placed, [cooking, reading, walking], StepRandomSource())

    self.assertListEqual(names(not_placable), ["Lisa"])
    self.assertListEqual(names(placed["Walking"]), ["Kate", "Harry"])

  def test_assign_random_exclude(self):
    cooking = stbmatch.Slot("Cooking", 1)
    reading = stbmatch.Slot("Reading", 2)
    placed = {"Cooking": [self.pa("Bert", 0)]}
    kate = self.pa("Kate", 1, exclude=[reading])
    ludo = self.pa("Ludo", 2, exclude=[reading])

    rng = StepRandomSource()
    not_placable = core.assign_random(
        [kate, ludo], placed, [cooking, reading], rng)

    self.assertListEqual(names(not_placable), ["Kate", "Ludo"])
    self.assertDictEqual({k: names(v) for k, v in placed.items()},
                         {"Cooking": ["Bert"]})
    # never asked to choose among nothing
    self.assertListEqual(rng.choices, [])

  def test_assign_random_uses_draw(self):
    placed = {}
    lisa = self.pa("Lisa", 0)
    core.assign_random([lisa], placed, self.slots, LastRandomSource())
    self.assertDictEqual({k: names(v) for k, v in placed.items()},
                         {"Walking": ["Lisa"]})

  def test_da_stb(self):
    bert = stbmatch.Applicant("Bert", [self.walking])
    kate = stbmatch.Applicant("Kate", [self.walking])
    placed, not_placable, order = core.da_stb(
        [bert, kate], self.slots, StepRandomSource())
    # Kate wins the tie break for the single walking seat
    self.assertListEqual(names(order), ["Kate", "Bert"])
    self.assertListEqual(names(placed["Walking"]), ["Kate"])
    self.assertListEqual(names(placed["Cooking"]), ["Bert"])
    self.assertListEqual(not_placable, [])


if __name__ == '__main__':
  unittest.main()
