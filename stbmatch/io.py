"""Match instance input/output."""

import json
import pickle

import numpy as np
from scipy import io as sio

import stbmatch.instance
import stbmatch.utils

__all__ = ["instance_to_dict", "instance_from_dict", "save_json",
           "load_json", "save_pickle", "load_pickle", "save_mat"]


def instance_to_dict(ins):
  """Plain python representation of a `MatchInstance`.

  Slots are listed once; applicants refer to them by name.
  """
  return {
      "slots": [{"name": slot.name, "capacity": slot.capacity}
                for slot in ins.slots],
      "applicants": [
          {
              "name": a.name,
              "preferences": [slot.name for slot in a.preferences],
              "exclude": sorted(slot.name for slot in a.exclude)
          } for a in ins.applicants
      ]
  }


def instance_from_dict(fields):
  """Inverse of `instance_to_dict`.

  Raises:
    KeyError if an applicant refers to a slot that is not listed.
  """
  slots = [stbmatch.instance.Slot(s["name"], int(s["capacity"]))
           for s in fields["slots"]]
  lookup = {slot.name: slot for slot in slots}
  applicants = [
      stbmatch.instance.Applicant(
          a["name"],
          [lookup[name] for name in a.get("preferences", [])],
          [lookup[name] for name in a.get("exclude", [])]
      ) for a in fields["applicants"]
  ]
  return stbmatch.instance.MatchInstance(applicants, slots)


def save_json(ins, filename):
  """Save MatchInstance to json format.

  Args:
    ins: a `MatchInstance` object.
    filename: output file name.
  """
  with open(filename, mode="w") as g:
    json.dump(instance_to_dict(ins), g, indent=4)


def load_json(filename):
  """Read instance from a json file.

  Args:
    filename: input json file name.
  Returns:
    A `MatchInstance` object.
  """
  with open(filename) as f:
    all_fields = json.load(f)
  return instance_from_dict(all_fields)


def save_pickle(ins, filename):
  """Save MatchInstance to python's pickle format.

  Args:
    ins: a `MatchInstance`.
    filename: output file name.
  """
  with open(filename, "wb") as g:
    pickle.dump(instance_to_dict(ins), g)


def load_pickle(filename):
  """Read instance from a python pickle file.

  Warning: As official python3 documentation has suggested, pickle format is NOT
  secure against adversarial attack. Please make sure you trust the source of the
  data file.

  Args:
    filename: pickle file name.
  Returns:
    A `MatchInstance` object.
  """
  with open(filename, "rb") as f:
    all_data = pickle.load(f)
  return instance_from_dict(all_data)


def save_mat(result, ins, filename):
  """Save a match result to MATLAB style .mat file.

  Save the assignment matrix `X` (applicants by slots) and the capacity
  vector `cap` into a '.mat' file for use in MATLAB.

  Args:
    result: a `MatchResult` for the instance.
    ins: the `MatchInstance` that was matched.
    filename: output filename with or without '.mat' extension.
  """
  sio.savemat(
        filename,
        {
            "X": stbmatch.utils.assignment_matrix(
                result, ins.applicants, ins.slots).astype(np.float64),
            "cap": np.array([slot.capacity for slot in ins.slots],
                            dtype=np.int32).reshape(-1, 1)
        }
  )
