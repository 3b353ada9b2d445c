"""Shared fixtures for the stbmatch tests"""

import stbmatch


class StepRandomSource():
  """Deterministic random source.

  `shuffle` walks the list from the back, swapping every element with the
  first one, and `choose_uniformly` always picks the first candidate. This is
  what a constant generator that always draws index 0 produces.
  """
  def __init__(self):
    self.choices = []

  def shuffle(self, seq):
    for i in range(len(seq) - 1, 0, -1):
      seq[i], seq[0] = seq[0], seq[i]

  def choose_uniformly(self, candidates):
    assert len(candidates) > 0
    self.choices.append([slot.name for slot in candidates])
    return candidates[0]


class LastRandomSource(StepRandomSource):
  """Like `StepRandomSource`, but picks the last candidate."""
  def choose_uniformly(self, candidates):
    assert len(candidates) > 0
    self.choices.append([slot.name for slot in candidates])
    return candidates[-1]


def get_data(cooking_cap, reading_cap, walking_cap):
  """Five applicants over three activities.

  With `StepRandomSource` the tie break order is
  Suze < Kate < Harry < Lisa < Bert.
  """
  cooking = stbmatch.Slot("Cooking", cooking_cap)
  reading = stbmatch.Slot("Reading", reading_cap)
  walking = stbmatch.Slot("Walking", walking_cap)

  bert = stbmatch.Applicant("Bert", [cooking, reading, walking])
  suze = stbmatch.Applicant("Suze", [walking, cooking])
  kate = stbmatch.Applicant("Kate", [walking, reading])
  harry = stbmatch.Applicant("Harry", [walking], exclude=[cooking])
  lisa = stbmatch.Applicant("Lisa")

  return [bert, suze, kate, harry, lisa], [cooking, reading, walking]
