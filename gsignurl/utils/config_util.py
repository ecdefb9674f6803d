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
"""Shared utility methods for reading gsignurl config files.

Config files are INI files, e.g.:

  [Credentials]
  service_key_file = /path/to/key.json

  [SignUrl]
  duration = 1h
  method = GET
"""

import configparser
import os

from gsignurl.exception import CommandException

CONFIG_ENV_VAR = 'GSIGNURL_CONFIG'
DEFAULT_CONFIG_PATH = os.path.join('~', '.gsignurl.cfg')


def GetConfigFileLocations():
  """Returns the candidate config file paths, in load order."""
  if os.environ.get(CONFIG_ENV_VAR):
    return [
        os.path.expanduser(path)
        for path in os.environ[CONFIG_ENV_VAR].split(os.pathsep)
        if path
    ]
  return [os.path.expanduser(DEFAULT_CONFIG_PATH)]


def GetConfigFilePaths():
  """Returns the config file locations that exist and are readable."""
  config_paths = []
  for path in GetConfigFileLocations():
    try:
      with open(path, 'r'):
        config_paths.append(path)
    except IOError:
      pass
  return config_paths


def LoadConfig(config_paths=None):
  """Loads the config files into a ConfigParser.

  Args:
    config_paths: Optional list of paths. Defaults to GetConfigFilePaths().

  Raises:
    CommandException: if a config file cannot be parsed.
  """
  if config_paths is None:
    config_paths = GetConfigFilePaths()
  config = configparser.ConfigParser()
  try:
    config.read(config_paths)
  except configparser.Error as e:
    raise CommandException('Failed to parse config file(s) %s: %s' %
                           (', '.join(config_paths), e))
  return config


def GetServiceKeyFile(config):
  return config.get('Credentials', 'service_key_file', fallback=None)


def GetDefaultDuration(config):
  return config.get('SignUrl', 'duration', fallback=None)


def GetDefaultMethod(config):
  return config.get('SignUrl', 'method', fallback='GET')
