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

from .. import scheduler
from ...model import ResourceState


class BatchScheduler(scheduler.DynamicScheduler):
  """
  Batch-mode heuristic base implementation.

  Matches currently ready tasks with currently idle resources, one pair at a time,
  until either list runs out.

  The order in a batch is determined by a heuristic:

  * MinMin prioritizes the tasks with minimum length

  * MaxMin prioritizes the tasks with maximum length

  Target is always the idle resource with the largest requested load
  (first one in the pool on equal loads).
  """

  def schedule(self, ready_tasks, idle_resources):
    pending = list(ready_tasks)
    idle = list(idle_resources)
    scheduled = []
    while pending:
      task = self.batch_heuristic(pending)
      pending.remove(task)
      if not idle:
        break
      target = max(idle, key=lambda r: r.requested_load)
      idle.remove(target)
      target.state = ResourceState.BUSY
      task.resource_id = target.id
      scheduled.append(task)
      self._log.debug("%s -> %s", task.id, target.id)
    return scheduled

  def batch_heuristic(self, pending_tasks):
    raise NotImplementedError()


class MinMin(BatchScheduler):
  """
  Batch-mode MinMin scheduler.

  Shortest ready task (by length) is matched first, ties go to the earlier task.
  """

  def batch_heuristic(self, pending_tasks):
    return min(pending_tasks, key=lambda t: t.length)


class MaxMin(BatchScheduler):
  """
  Batch-mode MaxMin scheduler.

  Longest ready task (by length) is matched first, ties go to the earlier task.
  """

  def batch_heuristic(self, pending_tasks):
    return max(pending_tasks, key=lambda t: t.length)
