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
"""Shared helpers and constants for gsignurl tests."""

import datetime
import pkgutil

from gsignurl.utils.credentials_helper import ReadJSONKeystore

# Moment every golden fixture in signurl_signatures was signed at.
TEST_SIGNING_TIME = datetime.datetime(2024, 1, 15, 10, 0, 0,
                                      tzinfo=datetime.timezone.utc)

# Byte length of the RSA modulus of the test key.
TEST_KEY_SIZE_BYTES = 256


def GetTestData(name):
  """Returns the bytes of a file in gsignurl/tests/test_data."""
  return pkgutil.get_data('gsignurl', 'tests/test_data/%s' % name)


def GetTestKeystoreContents():
  return GetTestData('test.json')


def GetTestServiceAccountKey():
  return ReadJSONKeystore(GetTestKeystoreContents())


def GetTestEcPrivateKeyPem():
  return GetTestData('test_ec.pem').decode('utf-8')
