"""Slot allocation library for python3.

Create applicants and slots, and place applicants into slots using the
Deferred Acceptance algorithm with a Single Tie Break (DA-STB).
"""

import stbmatch.core
import stbmatch.random

__all__ = [
    "Slot", "Applicant", "MatchResult", "MatchInstance",
    "match_single", "match_multi"
]


class Slot():
  """A placement target with a finite number of seats.

  Slots are identified by name only: two slots with the same name are equal,
  whatever their capacity. Names must be unique within one instance.

  Attributes:
    name: unique name of the slot.
    capacity: maximum number of applicants the slot can hold.
  """
  def __init__(self, name, capacity):
    self.name = name
    self.capacity = capacity

  def __repr__(self):
    return "<Slot {0} ({1})>".format(self.name, self.capacity)

  def __eq__(self, other):
    if not isinstance(other, Slot):
      return NotImplemented
    return self.name == other.name

  def __lt__(self, other):
    return self.name < other.name

  def __hash__(self):
    return hash(self.name)

  def copy(self, capacity=None):
    """Returns a detached copy, optionally with another capacity."""
    return Slot(self.name, self.capacity if capacity is None else capacity)


class Applicant():
  """Someone to be placed.

  Applicants are identified (and ordered) by name only. The ordering is meant
  for display, the matcher never uses it.

  Attributes:
    name: unique name of the applicant.
    preferences: tuple of slots, most preferred first.
    exclude: frozenset of slots the applicant must never be placed in.
  """
  def __init__(self, name, preferences=(), exclude=()):
    self.name = name
    self.preferences = tuple(preferences)
    self.exclude = frozenset(exclude)

  def __repr__(self):
    return "<Applicant {0}>".format(self.name)

  def __eq__(self, other):
    if not isinstance(other, Applicant):
      return NotImplemented
    return self.name == other.name

  def __lt__(self, other):
    return self.name < other.name

  def __hash__(self):
    return hash(self.name)

  def excluding(self, slot):
    """Returns a copy of this applicant that also excludes `slot`."""
    return Applicant(self.name, self.preferences, self.exclude | {slot})


class MatchResult():
  """Outcome of a match.

  Attributes:
    placed: dict from slot name to the list of applicants placed there. Slots
      without any placement have no entry; use `get` for a default.
    not_placable: list of applicants that could not be placed.
    lottery: list with, for every matcher run, the applicant names in tie
      break order (best first). `match_single` records one run,
      `match_multi` one per round.
  """
  def __init__(self, placed=None, not_placable=None, lottery=None):
    self.placed = {} if placed is None else placed
    self.not_placable = [] if not_placable is None else not_placable
    self.lottery = [] if lottery is None else lottery

  def __repr__(self):
    return "<MatchResult with {p} placements in {s} slots, {n} not placable>".format(
        p=sum(len(li) for li in self.placed.values()), s=len(self.placed),
        n=len(self.not_placable))

  def get(self, slot_name):
    return self.placed.get(slot_name, [])

  def placed_names(self):
    """Returns a dict from slot name to list of applicant names."""
    return {name: [a.name for a in li] for name, li in self.placed.items()}


class MatchInstance():
  """A list of applicants together with the slots they compete for.

  Attributes:
    applicants: list of `Applicant`.
    slots: list of `Slot`.
  """
  def __init__(self, applicants, slots):
    self.applicants = list(applicants)
    self.slots = list(slots)

  def __repr__(self):
    return "<MatchInstance with {a} applicants and {s} slots>".format(
        a=len(self.applicants), s=len(self.slots))

  def total_capacity(self):
    return sum(slot.capacity for slot in self.slots)

  def validate(self):
    """Check the instance is well formed.

    The matcher itself never validates its input; call this explicitly when
    the data comes from an untrusted place.

    Raises:
      ValueError if names are duplicated, a capacity is negative, or an
      applicant refers to a slot that is not part of the instance.
    """
    slot_names = [slot.name for slot in self.slots]
    if len(slot_names) != len(set(slot_names)):
      raise ValueError("Duplicate slot names.")
    applicant_names = [a.name for a in self.applicants]
    if len(applicant_names) != len(set(applicant_names)):
      raise ValueError("Duplicate applicant names.")
    for slot in self.slots:
      if slot.capacity < 0:
        raise ValueError("Slot {0} has negative capacity.".format(slot.name))
    known = set(self.slots)
    for a in self.applicants:
      unknown = (set(a.preferences) | a.exclude) - known
      if unknown:
        raise ValueError("Applicant {0} refers to unknown slots {1}.".format(
            a.name, sorted(slot.name for slot in unknown)))

  def match_single(self, rng=None, verbose=False):
    return match_single(self.applicants, self.slots, rng, verbose)

  def match_multi(self, rng=None, verbose=False):
    return match_multi(self.applicants, self.slots, rng, verbose)


def match_single(applicants, slots, rng=None, verbose=False):
  """Place every applicant in at most one slot.

  Args:
    applicants: list of `Applicant`. Names must be unique.
    slots: list of `Slot`. Names must be unique and capacities non-negative.
      Every slot an applicant refers to should be in this list. Read only.
    rng: None, an int seed, a `numpy.random.Generator` or any object with
      `shuffle` and `choose_uniformly` methods.
    verbose: bool, optional
      If set to True, progress of the algorithm is printed. Default is False.

  Returns:
    A `MatchResult`. The applicant objects in it are the ones passed in.
  """
  rng = stbmatch.random.as_random_source(rng)
  placed, not_placable, order = stbmatch.core.da_stb(
      applicants, slots, rng, verbose)
  return MatchResult(
      placed={name: [pa.applicant for pa in li]
              for name, li in placed.items() if li},
      not_placable=[pa.applicant for pa in not_placable],
      lottery=[[pa.name for pa in order]]
  )


def match_multi(applicants, slots, rng=None, verbose=False):
  """Place applicants in possibly more than one slot.

  Runs `match_single` in rounds. After each round the placed seats are taken
  off the remaining capacity, and every placed applicant excludes the slot it
  got from then on. Rounds go on while seats remain and the previous round
  filled at least one of them.

  Only the first round decides who is not placable.

  Args:
    applicants: list of `Applicant`. Names must be unique.
    slots: list of `Slot`. Not modified; the rounds work on copies.
    rng: see `match_single`.
    verbose: bool, optional
      If set to True, a summary of every round is printed. Default is False.

  Returns:
    A `MatchResult`.
  """
  rng = stbmatch.random.as_random_source(rng)
  originals = {a.name: a for a in applicants}
  applicants = list(applicants)
  slots = [slot.copy() for slot in slots]
  result = MatchResult()

  spots_available = sum(slot.capacity for slot in slots)
  previous_spots_available = None
  rounds = 0
  while spots_available > 0 and (previous_spots_available is None or
                                 previous_spots_available > spots_available):
    round_result = match_single(applicants, slots, rng)
    position = {a.name: i for i, a in enumerate(applicants)}
    for slot in slots:
      newly_placed = round_result.placed.get(slot.name)
      if newly_placed is None:
        continue
      slot.capacity -= len(newly_placed)
      merged = result.placed.setdefault(slot.name, [])
      for a in newly_placed:
        i = position[a.name]
        applicants[i] = applicants[i].excluding(slot)
        merged.append(originals[a.name])

    if rounds == 0:
      result.not_placable = [originals[a.name]
                             for a in round_result.not_placable]
    result.lottery += round_result.lottery

    previous_spots_available = spots_available
    spots_available = sum(slot.capacity for slot in slots)
    rounds += 1
    if verbose:
      print("Round #{0}: filled {1} seats, {2} left.".format(
          rounds, previous_spots_available - spots_available,
          spots_available))
  return result
