"""Deferred Acceptance with Single Tie Break (DA-STB) implementation"""

import operator

__all__ = ["PriorityApplicant", "draw_order", "place_applicants",
           "truncate_slots", "deferred_acceptance", "assign_random",
           "da_stb"]


class PriorityApplicant():
  """An applicant decorated with its tie break rank.

  The rank is fixed for one matcher run. A lower rank means a higher priority.
  Instances compare by rank only; the natural (name) order of applicants plays
  no role in placement decisions.

  Attributes:
    applicant: the wrapped applicant. Never mutated.
    rank: position of the applicant in the single tie break draw.
    cursor: index of the next preference to propose to.
  """
  def __init__(self, applicant, rank):
    self.applicant = applicant
    self.rank = rank
    self.cursor = 0

  def __repr__(self):
    return "<PriorityApplicant {0} rank={1} cursor={2}>".format(
        self.applicant.name, self.rank, self.cursor)

  def __eq__(self, other):
    if not isinstance(other, PriorityApplicant):
      return NotImplemented
    return self.rank == other.rank

  def __lt__(self, other):
    return self.rank < other.rank

  def __hash__(self):
    return hash(self.rank)

  @property
  def name(self):
    return self.applicant.name

  def is_excluded(self, slot):
    return slot in self.applicant.exclude

  def next_preference(self):
    """Consume the most preferred remaining slot.

    Returns:
      The slot, or None if the preferences are exhausted.
    """
    preferences = self.applicant.preferences
    if self.cursor >= len(preferences):
      return None
    slot = preferences[self.cursor]
    self.cursor += 1
    return slot


_by_rank = operator.attrgetter("rank")


def draw_order(applicants, rng):
  """Draw the single tie break.

  Args:
    applicants: list of applicants. The list itself is left untouched.
    rng: a random source providing `shuffle`.

  Returns:
    A list of `PriorityApplicant`, in rank order.
  """
  drawn = list(applicants)
  rng.shuffle(drawn)
  return [PriorityApplicant(a, rank) for rank, a in enumerate(drawn)]


def place_applicants(unplaced, placed, not_placable):
  """Let every unplaced applicant propose to its next preference.

  An applicant whose preferences are exhausted, or whose next preference is a
  slot it excludes, goes to `not_placable`. Capacity is not checked here.

  Args:
    unplaced: iterable of `PriorityApplicant`.
    placed: dict from slot name to list of `PriorityApplicant`, updated in
      place.
    not_placable: list of `PriorityApplicant`, appended to in place.
  """
  for pa in unplaced:
    slot = pa.next_preference()
    if slot is None or pa.is_excluded(slot):
      not_placable.append(pa)
    else:
      placed.setdefault(slot.name, []).append(pa)


def truncate_slots(placed, slots):
  """Evict the lowest ranked applicants from oversubscribed slots.

  Args:
    placed: dict from slot name to list of `PriorityApplicant`, updated in
      place. A truncated slot is left sorted by rank.
    slots: list of slots giving the capacities.

  Returns:
    List of evicted `PriorityApplicant`.
  """
  evicted = []
  for slot in slots:
    held = placed.get(slot.name)
    if held is not None and len(held) > slot.capacity:
      held.sort(key=_by_rank)
      evicted += held[slot.capacity:]
      del held[slot.capacity:]
  return evicted


def deferred_acceptance(unplaced, slots, verbose=False):
  """Run proposals and truncations until nobody is left unplaced.

  Every pass consumes one preference of each proposing applicant, so the loop
  ends once all preferences are spent at the latest.

  Args:
    unplaced: list of `PriorityApplicant` to place.
    slots: list of slots giving the capacities.
    verbose: bool, optional. Print progress if True.

  Returns:
    placed: dict from slot name to list of `PriorityApplicant`.
    not_placable: list of `PriorityApplicant` who ran out of preferences.
  """
  placed = {}
  not_placable = []
  steps = 0
  while unplaced:
    if verbose:
      print("DA step #{0}: {1} applicants proposing.".format(
          steps, len(unplaced)))
    place_applicants(unplaced, placed, not_placable)
    unplaced = truncate_slots(placed, slots)
    steps += 1
  if verbose:
    print("DA converged in {0} steps, {1} applicants without a seat.".format(
        steps, len(not_placable)))
  return placed, not_placable


def _open_slots(pa, placed, slots):
  return [slot for slot in slots
          if len(placed.get(slot.name, ())) < slot.capacity
          and not pa.is_excluded(slot)]


def assign_random(not_placable, placed, slots, rng, verbose=False):
  """Spread leftover applicants over the remaining free seats.

  Applicants are handled in rank order; each one gets a uniformly random slot
  among those it does not exclude and that still have a free seat.

  Args:
    not_placable: list of `PriorityApplicant` who exhausted preferences.
    placed: dict from slot name to list of `PriorityApplicant`, updated in
      place.
    slots: list of slots giving the capacities.
    rng: a random source providing `choose_uniformly`.
    verbose: bool, optional. Print every random assignment if True.

  Returns:
    List of `PriorityApplicant` that could not be placed anywhere.
  """
  still_not_placable = []
  for pa in sorted(not_placable, key=_by_rank):
    candidates = _open_slots(pa, placed, slots)
    if not candidates:
      still_not_placable.append(pa)
      continue
    slot = rng.choose_uniformly(candidates)
    placed.setdefault(slot.name, []).append(pa)
    if verbose:
      print("Randomly assigned {0} to {1}.".format(pa.name, slot.name))
  return still_not_placable


def da_stb(applicants, slots, rng, verbose=False):
  """One full DA-STB pass.

  Args:
    applicants: list of applicants.
    slots: list of slots. Read only.
    rng: a random source (see `stbmatch.random.RandomSource`).
    verbose: bool, optional.

  Returns:
    placed: dict from slot name to list of `PriorityApplicant`.
    not_placable: list of `PriorityApplicant`.
    order: list of `PriorityApplicant` in rank order.
  """
  order = draw_order(applicants, rng)
  placed, not_placable = deferred_acceptance(list(order), slots, verbose)
  not_placable = assign_random(not_placable, placed, slots, rng, verbose)
  return placed, not_placable, order
