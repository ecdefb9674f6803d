#!/usr/bin/env python
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
"""Main module for the gsignurl command line tool."""

import getopt
import logging
import re
import sys
import traceback

import gsignurl
from gsignurl.commands.signurl import DETAILED_HELP_TEXT
from gsignurl.commands.signurl import SignUrlCommand
from gsignurl.exception import CommandException
from gsignurl.exception import SignUrlException
from gsignurl.utils import config_util

debug = 0

_USAGE = """Usage: gsignurl [-d|-D|-q|-v] command [args]

Commands:
  signurl    Create a signed URL
  help       Show this message and the signurl help
  version    Print version information
"""


def _OutputAndExit(message):
  if debug > 2:
    stack_trace = traceback.format_exc()
    err = ('DEBUG: Exception stack trace:\n    %s\n%s\n' %
           (re.sub('\\n', '\n    ', stack_trace), message))
  else:
    err = '%s\n' % message
  sys.stderr.write(err)
  sys.exit(1)


def _OutputUsageAndExit():
  sys.stderr.write(_USAGE)
  sys.exit(1)


def _HandleCommandException(e):
  if e.informational:
    _OutputAndExit(e.reason)
  else:
    _OutputAndExit('CommandException: %s' % e.reason)


def _RunNamedCommandAndHandleExceptions(command_name, args, config):
  try:
    if command_name == 'signurl':
      return SignUrlCommand(args, config=config, debug=debug).RunCommand()
    elif command_name == 'help':
      sys.stdout.write(_USAGE)
      sys.stdout.write(DETAILED_HELP_TEXT)
      return 0
    elif command_name == 'version':
      sys.stdout.write('gsignurl version: %s\n' % gsignurl.VERSION)
      return 0
    raise CommandException('Invalid command "%s".' % command_name)
  except CommandException as e:
    _HandleCommandException(e)
  except SignUrlException as e:
    _OutputAndExit(str(e))
  except KeyboardInterrupt:
    _OutputAndExit('Caught interrupt - exiting')


def main(argv=None):
  global debug

  if argv is None:
    argv = sys.argv[1:]
  quiet = False
  version = False
  debug = 0

  try:
    opts, args = getopt.getopt(argv, 'dDvq?',
                               ['debug', 'detailedDebug', 'version', 'help',
                                'quiet'])
  except getopt.GetoptError as e:
    _HandleCommandException(CommandException(e.msg))
  for o, unused_a in opts:
    if o in ('-d', '--debug'):
      debug = 2
    elif o in ('-D', '--detailedDebug'):
      # -DD additionally prints stack traces for failures.
      if debug == 3:
        debug = 4
      else:
        debug = 3
    elif o in ('-?', '--help'):
      _OutputUsageAndExit()
    elif o in ('-q', '--quiet'):
      quiet = True
    elif o in ('-v', '--version'):
      version = True

  if debug > 1:
    logging.basicConfig(level=logging.DEBUG)
    sys.stderr.write(
        '***************************** WARNING *****************************\n'
        '*** You are running gsignurl with debug output enabled.\n'
        '*** Signed URLs in debug output grant access to your objects until\n'
        '*** they expire. Do not share debug output unless you have removed\n'
        '*** them.\n'
        '***************************** WARNING *****************************\n')
  elif quiet:
    logging.basicConfig(level=logging.WARNING)
  else:
    logging.basicConfig(level=logging.INFO)

  if version:
    command_name = 'version'
  elif not args:
    command_name = 'help'
  else:
    command_name = args[0]

  try:
    config = config_util.LoadConfig()
  except CommandException as e:
    _HandleCommandException(e)
  if debug > 2:
    logging.debug('config_file_list: %s', config_util.GetConfigFilePaths())

  return _RunNamedCommandAndHandleExceptions(command_name, args[1:], config)


if __name__ == '__main__':
  sys.exit(main())
