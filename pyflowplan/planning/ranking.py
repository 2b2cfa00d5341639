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

from ..model import CyclicGraphError


def upward_ranks(tasks, cost_model):
  """
  Compute upward rank of every task.

    ranku(task) = mean_eet(task) + max_among_children(transfer(task, child) + ranku(child))

  Children are always ranked before their parents (iterative post-order walk),
  each task is ranked exactly once.

  Args:
    tasks: iterable of tasks to rank (their descendants are ranked too)
    cost_model: :class:`pyflowplan.planning.costs.CostModel` of the run

  Returns:
    dict task -> rank

  Raises:
    CyclicGraphError: if the walk comes back to a task still being visited
  """
  ranks = {}
  visiting = set()
  for start in tasks:
    if start in ranks:
      continue
    visiting.add(start)
    stack = [(start, iter(start.children))]
    while stack:
      task, children = stack[-1]
      for child in children:
        if child in ranks:
          continue
        if child in visiting:
          path = [entry[0] for entry in stack]
          raise CyclicGraphError(path[path.index(child):])
        visiting.add(child)
        stack.append((child, iter(child.children)))
        break
      else:
        stack.pop()
        visiting.discard(task)
        ranks[task] = cost_model.mean_eet(task) + max(
          [cost_model.transfer(task, child) + ranks[child] for child in task.children] or [0.])
  return ranks


def heft_order(tasks, ranks):
  """
  Order tasks by non-increasing rank.

  Sort is stable, so tasks with equal ranks keep the order they were given in.
  Pass tasks in a topological order to keep parents ahead of children on ties.
  """
  return sorted(tasks, key=lambda task: ranks[task], reverse=True)
