# Copyright 2024 The marco-docker Authors
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

"""
marco-docker - Docker backend discovery for Marco

Watches the running containers on a host, groups their published ports by
the domain found in each container's environment and pushes the resulting
backend lists to a Marco load balancer.
"""

__version__ = "0.1.0"
__author__ = "The marco-docker Authors"
__license__ = "Apache-2.0"
