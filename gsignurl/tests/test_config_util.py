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
"""Unit tests for config_util.py."""

import os
from unittest import mock

from gsignurl.exception import CommandException
from gsignurl.tests import testcase
from gsignurl.utils import config_util

_CONFIG_CONTENTS = """
[Credentials]
service_key_file = /keys/sa.json

[SignUrl]
duration = 30m
method = PUT
"""


class TestConfigUtil(testcase.GsignurlTestCase):
  """Unit tests for locating and reading config files."""

  def testConfigFileLocationsFromEnvironment(self):
    paths = os.pathsep.join(['/a.cfg', '/b.cfg'])
    with mock.patch.dict(os.environ, {config_util.CONFIG_ENV_VAR: paths}):
      self.assertEqual(config_util.GetConfigFileLocations(),
                       ['/a.cfg', '/b.cfg'])

  def testDefaultConfigFileLocation(self):
    with mock.patch.dict(os.environ, {config_util.CONFIG_ENV_VAR: ''}):
      self.assertEqual(config_util.GetConfigFileLocations(),
                       [os.path.expanduser(config_util.DEFAULT_CONFIG_PATH)])

  def testOnlyExistingConfigFilesAreUsed(self):
    config_file = self.CreateTempFile(contents=_CONFIG_CONTENTS)
    missing = os.path.join(self.CreateTempDir(), 'missing.cfg')
    paths = os.pathsep.join([missing, config_file])
    with mock.patch.dict(os.environ, {config_util.CONFIG_ENV_VAR: paths}):
      self.assertEqual(config_util.GetConfigFilePaths(), [config_file])

  def testLoadConfig(self):
    config = config_util.LoadConfig(
        [self.CreateTempFile(contents=_CONFIG_CONTENTS)])
    self.assertEqual(config_util.GetServiceKeyFile(config), '/keys/sa.json')
    self.assertEqual(config_util.GetDefaultDuration(config), '30m')
    self.assertEqual(config_util.GetDefaultMethod(config), 'PUT')

  def testLoadConfigDefaults(self):
    config = config_util.LoadConfig([])
    self.assertIsNone(config_util.GetServiceKeyFile(config))
    self.assertIsNone(config_util.GetDefaultDuration(config))
    self.assertEqual(config_util.GetDefaultMethod(config), 'GET')

  def testLoadConfigFromEnvironment(self):
    config_file = self.CreateTempFile(contents=_CONFIG_CONTENTS)
    with mock.patch.dict(os.environ, {config_util.CONFIG_ENV_VAR: config_file}):
      config = config_util.LoadConfig()
    self.assertEqual(config_util.GetDefaultMethod(config), 'PUT')

  def testMalformedConfig(self):
    config_file = self.CreateTempFile(contents='service_key_file = x\n')
    with self.assertRaises(CommandException) as cm:
      config_util.LoadConfig([config_file])
    self.assertIn('Failed to parse', cm.exception.reason)
