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

from .timeline import Timeline


class MinSelector(object):
  """
  Keep the value with the smallest key. First value wins on equal keys.
  """
  def __init__(self):
    self.key = None
    self.value = None

  def update(self, key, value):
    if self.key is None or key < self.key:
      self.key = key
      self.value = value


class SchedulerState(object):
  """
  Working state of a static planning run.

  Attributes:
    task_states: dict task -> {"ect": finish time, "resource": assigned resource}
    timeline: :class:`pyflowplan.planning.timeline.Timeline` of committed slots
  """
  def __init__(self, resources):
    self.task_states = {}
    self.timeline = Timeline(resources)

  def update(self, task, resource, ready_time, eet):
    """
    Reserve the earliest slot for a task on a resource and record the placement.
    """
    finish = self.timeline.find_finish_time(resource, eet, ready_time, commit=True, task=task)
    self.task_states[task] = {
      "ect": finish,
      "resource": resource
    }
    task.resource_id = resource.id
    return finish

  def __getitem__(self, task):
    return self.task_states[task]

  def __contains__(self, task):
    return task in self.task_states

  @property
  def schedule(self):
    """
    Planned execution order as dict resource -> [tasks...].
    """
    return {resource: [slot.task for slot in timesheet] for resource, timesheet in self.timeline.items()}

  @property
  def finish_times(self):
    return {task: task_state["ect"] for task, task_state in self.task_states.items()}

  @property
  def makespan(self):
    return max([task_state["ect"] for task_state in self.task_states.values()] or [0.])
