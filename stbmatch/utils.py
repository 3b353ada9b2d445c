"""Match result verification utilities."""

import collections

import numba as nb
import numpy as np
from scipy import sparse as sp


def _index(items):
  return {item.name: j for j, item in enumerate(items)}


def assignment_matrix(result, applicants, slots):
  """Build the applicant-slot assignment matrix of a result.

  Args:
    result: a `MatchResult`.
    applicants: list of applicants, defines the rows.
    slots: list of slots, defines the columns.

  Returns:
    A (num_applicant, num_slot) sparse CSR matrix. Entry (i, j) counts how
    often applicant i was placed in slot j.
  """
  row, col = _index(applicants), _index(slots)
  I, J = [], []
  for name, li in result.placed.items():
    I += [row[a.name] for a in li]
    J += [col[name]] * len(li)
  return sp.coo_matrix(
      (np.ones(len(I), dtype=np.int8), (I, J)),
      shape=(len(applicants), len(slots)), dtype=np.int8).tocsr()


def exclusion_matrix(applicants, slots):
  """Same layout as `assignment_matrix`, with a 1 for every exclusion."""
  col = _index(slots)
  I, J = [], []
  for i, a in enumerate(applicants):
    js = [col[slot.name] for slot in a.exclude if slot.name in col]
    I += [i] * len(js)
    J += js
  return sp.coo_matrix(
      (np.ones(len(I), dtype=np.int8), (I, J)),
      shape=(len(applicants), len(slots)), dtype=np.int8).tocsr()


def check_conservation(result, applicants, multi=False):
  """Check every applicant is accounted for exactly once.

  Args:
    result: a `MatchResult`.
    applicants: the applicants that were matched.
    multi: set to True for results of `match_multi`, where an applicant may
      hold several slots.

  Returns:
    True if every applicant is either placed or not placable, never both, and
    nobody else shows up in the result.
  """
  placed = collections.Counter(
      a.name for li in result.placed.values() for a in li)
  not_placable = collections.Counter(a.name for a in result.not_placable)
  names = set(a.name for a in applicants)
  if set(placed) | set(not_placable) != names:
    return False
  if set(placed) & set(not_placable):
    return False
  if any(n > 1 for n in not_placable.values()):
    return False
  return multi or all(n == 1 for n in placed.values())


def check_feasible(result, applicants, slots):
  """Check capacities and exclusions are respected.

  Returns:
    True if no slot holds more applicants than its capacity, nobody sits
    twice in one slot, and nobody is placed in a slot it excludes.
  """
  X = assignment_matrix(result, applicants, slots)
  load = np.asarray(X.sum(axis=0)).ravel()
  cap = np.array([slot.capacity for slot in slots], dtype=np.int64)
  if np.any(load > cap):
    return False
  if X.nnz and X.max() > 1:
    return False
  return X.multiply(exclusion_matrix(applicants, slots)).sum() == 0


@nb.njit('int64(int32[:,:], int32[:], int32[:], int32[:], int64[:], int64[:], int32[:])')
def _count_justified_envy(pref, cutoff, assigned_pos, rank, load, cap,
                          worst_rank):
  """Count (applicant, slot) pairs where the applicant has justified envy.

  Applicant a envies slot t if t comes before a's assignment in its
  preferences. The envy is justified when t has a free seat or holds someone
  ranked worse than a.
  """
  count = 0
  for a in range(pref.shape[0]):
    for k in range(min(cutoff[a], assigned_pos[a])):
      t = pref[a, k]
      if t < 0:
        continue
      if load[t] < cap[t] or worst_rank[t] > rank[a]:
        count += 1
  return count


def _pref_arrays(applicants, col):
  """Padded preference matrix and the position of the first exclusion."""
  width = max([len(a.preferences) for a in applicants] + [1])
  pref = np.full((len(applicants), width), -1, dtype=np.int32)
  cutoff = np.zeros(len(applicants), dtype=np.int32)
  for i, a in enumerate(applicants):
    cutoff[i] = len(a.preferences)
    for k, slot in enumerate(a.preferences):
      if slot in a.exclude:
        # proposing to an excluded slot ends the applicant's proposals
        cutoff[i] = k
        break
      pref[i, k] = col.get(slot.name, -1)
  return pref, cutoff


def count_justified_envy(result, applicants, slots):
  """Count justified envy pairs in a `match_single` result.

  Only the preferences up to the first excluded one count, since the matcher
  stops proposing there. Applicants that were placed at random, or not at
  all, envy every slot in that part of their list.

  Raises:
    ValueError if `result` does not come from exactly one matcher run.
  """
  if len(result.lottery) != 1:
    raise ValueError("Envy is only defined for a single matcher run.")
  col = _index(slots)
  rank_of = {name: r for r, name in enumerate(result.lottery[0])}
  rank = np.array([rank_of[a.name] for a in applicants], dtype=np.int32)

  load = np.zeros(len(slots), dtype=np.int64)
  worst_rank = np.full(len(slots), -1, dtype=np.int32)
  assigned = {}
  for name, li in result.placed.items():
    j = col[name]
    load[j] = len(li)
    for a in li:
      assigned[a.name] = j
      worst_rank[j] = max(worst_rank[j], rank_of[a.name])
  cap = np.array([slot.capacity for slot in slots], dtype=np.int64)

  pref, cutoff = _pref_arrays(applicants, col)
  assigned_pos = cutoff.copy()
  for i, a in enumerate(applicants):
    j = assigned.get(a.name)
    if j is None:
      continue
    hits = np.nonzero(pref[i, :cutoff[i]] == j)[0]
    if hits.size > 0:
      assigned_pos[i] = hits[0]
  return _count_justified_envy(pref, cutoff, assigned_pos, rank, load, cap,
                               worst_rank)


def check_stable(result, applicants, slots):
  """Returns True if a `match_single` result has no justified envy."""
  return count_justified_envy(result, applicants, slots) == 0
