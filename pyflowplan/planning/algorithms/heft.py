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
from ..costs import CostModel
from ..ranking import upward_ranks, heft_order
from ..state import MinSelector, SchedulerState


class HEFT(scheduler.StaticScheduler):
  """
  Implementation of a famous Heterogeneous Earliest Finish Time (HEFT) scheduling algorithm.

  The general idea is very simple:
  1. Sort tasks according in decreasing ranku order

     ranku(task) = mean_eet(task) + max_among_children(ranku(child) + transfer(task, child))

     where mean_eet is averaged over all resources and transfer uses the mean pool bandwidth.

     Important property of this ordering is that it is also an topological order,
     so all task parents are already placed when the task is considered.

  2. Go over ordered tasks and schedule each one to the resource minimizing its finish time.

     HEFT scheduling allows insertions to happen, so if some resource has an empty and wide enough
     time slot, next task may be added in between already scheduled tasks.

  Resources lacking processing elements for a task have infinite cost and are only picked
  when no resource can run the task (then the first one is used).

  For more details please refer to the original HEFT publication:
    H. Topcuoglu, S. Hariri and Min-You Wu, "Performance-effective and low-complexity task
    scheduling for heterogeneous computing", IEEE Transactions on Parallel and Distributed
    Systems, Vol 13, No 3, 2002, pp. 260-274
  """

  def get_schedule(self, workflow):
    """
    Overriden.
    """
    tasks = list(workflow.tasks)
    resources = list(workflow.resources)
    self._log.info("HEFT planner running with %d tasks", len(tasks))

    # prioritization phase
    cost_model = CostModel(tasks, resources)
    ranks = upward_ranks(tasks, cost_model)
    ordered_tasks = heft_order(workflow.topological_order(), ranks)

    # selection phase
    state = SchedulerState(resources)
    heft_schedule(cost_model, state, ordered_tasks, self._log)
    return state, float(state.makespan)


def heft_schedule(cost_model, state, ordered_tasks, log=None):
  """
  Place tasks one by one on the resource giving the earliest finish time.

  Args:
    cost_model: :class:`pyflowplan.planning.costs.CostModel` of the run
    state: :class:`pyflowplan.planning.state.SchedulerState` to update
    ordered_tasks: tasks in a precedence-respecting priority order
  """
  for task in ordered_tasks:
    current_min = MinSelector()
    for resource in cost_model.resources:
      ready_time = cost_model.est(task, resource, state)
      eet = cost_model.eet(task, resource)
      finish = state.timeline.find_finish_time(resource, eet, ready_time)
      current_min.update(finish, (resource, ready_time, eet))
    resource, ready_time, eet = current_min.value
    finish = state.update(task, resource, ready_time, eet)
    if log:
      log.debug("%s -> %s (ready %f, finish %f)", task.id, resource.id, ready_time, finish)
  return state
