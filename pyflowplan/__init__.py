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

from . import model
from . import parameters
from . import planning

from .model import Workflow, Task, Resource, FileItem, FileType, ResourceState, CyclicGraphError
from .parameters import Parameters, PlanningAlgorithm, SchedulingAlgorithm

from . import _version
__version__ = _version.version
