"""Random sources and random instance generators"""

import numpy as np

import stbmatch.instance

__all__ = ["RandomSource", "as_random_source", "gen_random_instance"]


class RandomSource():
  """Uniform random source used by the matcher.

  The matcher needs exactly two things from its random source: a uniform
  in-place shuffle (to draw the single tie break) and a uniform choice among a
  non-empty list of candidates (to fill leftover seats). Any object providing
  `shuffle` and `choose_uniformly` with these semantics can replace this
  class.

  Attributes:
    generator: the underlying `numpy.random.Generator`.
  """
  def __init__(self, seed=None):
    """
    Args:
      seed: None, an int, or a `numpy.random.Generator` to draw from.
    """
    if isinstance(seed, np.random.Generator):
      self.generator = seed
    else:
      self.generator = np.random.default_rng(seed)

  def __repr__(self):
    return "<RandomSource {0}>".format(self.generator.bit_generator)

  def shuffle(self, seq):
    """Permute the list `seq` in place, uniformly at random."""
    order = self.generator.permutation(len(seq))
    seq[:] = [seq[i] for i in order]

  def choose_uniformly(self, candidates):
    """Returns one element of `candidates`, chosen uniformly at random.

    Raises:
      ValueError if `candidates` is empty.
    """
    if len(candidates) == 0:
      raise ValueError("Cannot choose from an empty candidate list.")
    return candidates[int(self.generator.integers(len(candidates)))]


def as_random_source(rng):
  """Turn `rng` into something the matcher can draw from.

  Args:
    rng: None, an int seed, a `numpy.random.Generator`, or an object that
      already has `shuffle` and `choose_uniformly` methods.

  Raises:
    TypeError if `rng` is none of the above.
  """
  if hasattr(rng, "shuffle") and hasattr(rng, "choose_uniformly"):
    return rng
  if rng is None or isinstance(rng, (int, np.integer, np.random.Generator)):
    return RandomSource(rng)
  raise TypeError("Cannot use {0!r} as a random source".format(rng))


def gen_random_instance(num_applicant, num_slot,
                        num_additional_seat=0,
                        pref_len=0,
                        exclude_prob=0.0,
                        seed=None):
  """Generate a uniform random instance.

  Generate an instance where each applicant's preference list is a uniformly
  random order over the slots, and seats are spread over the slots at random.

  Args:
    num_applicant: int
      Number of applicants.
    num_slot: int
      Number of slots. Slots are named "s0", "s1", ...; applicants "a0", ...
    num_additional_seat: int, optional
      Number of total seats will be number of applicants plus
      num_additional_seat, provided that each slot has at least one seat
      (otherwise the capacity is 1 for every slot). Default is 0.
    pref_len: int, optional
      Length of every preference list. Default: rank all slots.
    exclude_prob: float, optional
      Probability for every slot outside an applicant's preference list to be
      excluded by that applicant. Default is 0.
    seed: optional
      Seed or `numpy.random.Generator` for the generator.

  Returns:
    A `MatchInstance` object.
  """
  gen = seed if isinstance(seed, np.random.Generator) else (
      np.random.default_rng(seed))
  slot_seat = gen.integers(
      num_slot,
      size=max(num_applicant - num_slot + num_additional_seat, 0)
  )  # assign each seat randomly to a slot
  slots = [stbmatch.instance.Slot("s{0}".format(j), int(np.sum(slot_seat == j) + 1))
           for j in range(num_slot)]

  pref_list = np.argsort(gen.random((num_applicant, num_slot))).tolist()
  if pref_len:
    pref_list = [li[:pref_len] for li in pref_list]
  applicants = []
  for i in range(num_applicant):
    ranked = set(pref_list[i])
    exclude = [slots[j] for j in range(num_slot)
               if j not in ranked and gen.random() < exclude_prob]
    applicants.append(stbmatch.instance.Applicant(
        "a{0}".format(i), [slots[j] for j in pref_list[i]], exclude))

  return stbmatch.instance.MatchInstance(applicants, slots)
