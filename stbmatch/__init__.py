"""
stbmatch
=============================================
Placing applicants into slots of limited capacity.

The matching problem solved here is known as the residence (or college
admissions) problem. Applicants rank the slots they would like to be placed
in; slots do not rank applicants. Instead, a single random order over all
applicants (the single tie break) decides who keeps a seat when a slot is
oversubscribed. The algorithm is Deferred Acceptance with Single Tie Break
(DA-STB).

Example:

Suppose we place applicants in three activities. Cooking has 3 seats, Reading
2 seats and Walking a single seat.
---------------------------------------------
  >>> import stbmatch
  >>> cooking = stbmatch.Slot("Cooking", 3)
  >>> reading = stbmatch.Slot("Reading", 2)
  >>> walking = stbmatch.Slot("Walking", 1)
---------------------------------------------
Bert prefers cooking over reading over walking. Suze wants to walk, and cooks
otherwise. Harry only wants to walk, and must never be placed in cooking. Lisa
has no preference at all.
---------------------------------------------
  >>> applicants = [
  ...     stbmatch.Applicant("Bert", [cooking, reading, walking]),
  ...     stbmatch.Applicant("Suze", [walking, cooking]),
  ...     stbmatch.Applicant("Harry", [walking], exclude=[cooking]),
  ...     stbmatch.Applicant("Lisa")]
---------------------------------------------
Match them. Every applicant gets at most one slot:
---------------------------------------------
  >>> result = stbmatch.match_single(applicants, [cooking, reading, walking],
  ...                                rng=42)
  >>> result.placed_names()
  >>> result.not_placable
---------------------------------------------
Applicants that exhaust their preferences are spread at random over the seats
that are still free (respecting exclusions). Those that still find no seat end
up in `result.not_placable`.

To let an applicant hold several slots, use `match_multi`, which repeats the
match in rounds until no more seats can be filled:
---------------------------------------------
  >>> result = stbmatch.match_multi(applicants, [cooking, reading, walking])
---------------------------------------------
The `rng` argument takes a seed, a `numpy.random.Generator`, or any object
with `shuffle` and `choose_uniformly` methods. `result.lottery` records the
tie break order of every run so outcomes can be audited.
"""

from stbmatch.instance import *
from stbmatch.io import *
from stbmatch.random import *
