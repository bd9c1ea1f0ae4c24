# Copyright 2025 Berkan Tali
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exception types raised by the worldline engine."""


class WorldlineConstructionError(ValueError):
    """Bad parameters were supplied when building a segment or observer."""


class ProgrammingError(RuntimeError):
    """An internal invariant was broken. Never caused by user input."""


class CurveDomainError(ArithmeticError):
    """A curve conversion has no answer (or infinitely many) for the value given."""


class NoSegmentMatchError(LookupError):
    """No segment of an observer's worldline matched a query."""
