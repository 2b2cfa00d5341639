# This file is part of pyflowplan, a Python library for workflow planning and scheduling.
#
# Copyright 2015-2016 Alexey Nazarenko and contributors
#
# This library is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# along with this library.  If not, see <http://www.gnu.org/licenses/>.
#

import collections
import itertools


Slot = collections.namedtuple("Slot", ["task", "start", "finish"])


def timesheet_insertion(timesheet, est, eet):
  """
  Find the earliest slot for a task in a timesheet.

  Gaps between reservations are tried first, from the earliest one; the task is
  appended after the last reservation if no gap fits.

  Args:
    timesheet: list of :class:`Slot`, ordered by start time
    est: earliest start time (task ready time)
    eet: task execution time

  Returns:
    tuple (insert_index, start, finish)
  """
  insert_index = len(timesheet)
  start_time = max(timesheet[-1].finish, est) if timesheet else est

  if timesheet:
    insertion = [Slot(None, 0., 0.)]
    extended = itertools.chain(insertion, timesheet)
    for idx, (previous, current) in enumerate(zip(extended, timesheet)):
      slot_start = max(previous.finish, est)
      if slot_start + eet <= current.start:
        insert_index = idx
        start_time = slot_start
        break

  return (insert_index, start_time, start_time + eet)


class Timeline(object):
  """
  Per-resource ordered lists of reserved execution slots.

  Invariant: in every timesheet slot[i].finish <= slot[i + 1].start.
  """
  def __init__(self, resources=()):
    self._timesheets = collections.OrderedDict((resource, []) for resource in resources)

  def find_finish_time(self, resource, duration, ready_time, commit=False, task=None):
    """
    Earliest finish time of a task on a resource, not starting before ready_time.

    Args:
      resource: target resource
      duration: task execution time on the resource
      ready_time: moment all task inputs are available
      commit: if True, reserve the found slot
      task: task stored in the reserved slot
    """
    timesheet = self._timesheets.setdefault(resource, [])
    pos, start, finish = timesheet_insertion(timesheet, ready_time, duration)
    if commit:
      timesheet.insert(pos, Slot(task, start, finish))
    return finish

  def __getitem__(self, resource):
    return self._timesheets[resource]

  def __contains__(self, resource):
    return resource in self._timesheets

  def __iter__(self):
    return iter(self._timesheets)

  def items(self):
    return self._timesheets.items()
