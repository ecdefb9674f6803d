# -*- coding: utf-8 -*-
# Copyright 2024 Google LLC. All Rights Reserved.
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
"""Shared, hard-coded constants.

A constant should not be placed in this file if:
- it requires complicated or conditional logic to initialize.
- it requires importing any modules outside of the Python standard library.
- it is only used in one file (in which case it should be defined within that
  module).
"""

UTF8 = 'utf-8'

# Signed URL protocol tokens. These are matched byte for byte by the service.
SIGNING_ALGO = 'GOOG4-RSA-SHA256'
UNSIGNED_PAYLOAD = 'UNSIGNED-PAYLOAD'
SIGNING_REGION = 'auto'
SIGNING_SERVICE = 'storage'
SIGNING_REQUEST_TYPE = 'goog4_request'
HOST_SUFFIX = 'storage.googleapis.com'

SUPPORTED_METHODS = ('GET', 'POST', 'PUT', 'DELETE', 'PATCH')

# Seven days, the longest lifetime the service accepts for a V4 signature.
MAX_SIGNED_URL_DURATION_SEC = 604800
DEFAULT_SIGNED_URL_DURATION_SEC = MAX_SIGNED_URL_DURATION_SEC
