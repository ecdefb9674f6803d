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
"""Implementation of signurl command for generating V4 signed URLs."""

import datetime
import getopt
import logging
import re

from gsignurl.exception import CommandException
from gsignurl.utils import config_util
from gsignurl.utils import signurl_helper
from gsignurl.utils.constants import MAX_SIGNED_URL_DURATION_SEC
from gsignurl.utils.credentials_helper import ReadKeyFile

DETAILED_HELP_TEXT = ("""
<B>SYNOPSIS</B>
  gsignurl [-d|-D|-q] signurl [-c <content_type>] [-d <duration>]
      [-h <header:value>]... [-m <http_method>] [-q <param=value>]...
      [-s <subresource>] [keystore-file] gs://<bucket>/<object>...

<B>DESCRIPTION</B>
  The signurl command generates a V4 signed URL that embeds authentication
  data so the URL can be used by someone who does not have a Google account.
  The URL is signed with the private key of a service account, read from a
  JSON key file, and is valid for a limited time.

  If keystore-file is omitted, the service_key_file option from the
  [Credentials] section of the config file is used.

  The output is one tab separated line per URL:

    URL  HTTP Method  Expiration  Signed URL

<B>OPTIONS</B>
  -m          Specifies the HTTP method to be authorized for use with the
              signed URL. One of GET, POST, PUT, DELETE or PATCH. Default
              is GET.

  -d          Specifies the duration that the signed URL should be valid
              for. The default unit is hours. Use s, m, h or d to specify
              seconds, minutes, hours or days (e.g. "30m", "2d"). The
              maximum duration is 7 days.

  -c          Specifies the content type for which the signed URL is valid.

  -h          Adds a header, as "name:value", that the request must carry.
              May be given more than once.

  -q          Adds a query parameter, as "name=value", to sign. May be given
              more than once.

  -s          Signs for the given subresource (e.g. "acl").
""")

_DEFAULT_DURATION = '7d'
_URL_RE = re.compile(r'^gs://(?P<bucket>[^/]+)/(?P<object>.+)$')


def _DurationToSeconds(duration):
  r"""Parses the given duration and returns the equivalent number of seconds.

  Args:
    duration: String of the form "\d+[dhms]?". Without a unit, hours.

  Returns:
    Number of seconds.

  Raises:
    CommandException: if the duration cannot be parsed or is out of range.
  """
  match = re.match(r'^(\d+)([dDhHmMsS])?$', duration)
  if not match:
    raise CommandException('Unable to parse duration string "%s"' % duration)

  value, modifier = match.groups('h')
  value = int(value)
  modifier = modifier.lower()

  if modifier == 'd':
    delta = datetime.timedelta(days=value)
  elif modifier == 'h':
    delta = datetime.timedelta(hours=value)
  elif modifier == 'm':
    delta = datetime.timedelta(minutes=value)
  else:
    delta = datetime.timedelta(seconds=value)

  seconds = int(delta.total_seconds())
  if seconds > MAX_SIGNED_URL_DURATION_SEC:
    raise CommandException('Max valid duration allowed is 7 days')
  if seconds <= 0:
    raise CommandException('Duration must be positive')
  return seconds


def _SplitStorageUrl(url_str):
  match = _URL_RE.match(url_str)
  if not match:
    raise CommandException(
        'URL "%s" must be of the form gs://<bucket>/<object>' % url_str)
  return match.group('bucket'), match.group('object')


class SignUrlCommand(object):
  """Implementation of gsignurl signurl command."""

  command_name = 'signurl'
  supported_sub_args = 'c:d:h:m:q:s:'

  def __init__(self, args, config=None, logger=None, debug=0):
    self.args = list(args)
    self.config = config if config is not None else config_util.LoadConfig()
    self.logger = logger or logging.getLogger()
    self.debug = debug

  def ParseOpts(self):
    try:
      self.sub_opts, self.args = getopt.getopt(self.args,
                                               self.supported_sub_args)
    except getopt.GetoptError as e:
      raise CommandException('Incorrect option(s) specified. %s' % e.msg)

    self.method = config_util.GetDefaultMethod(self.config)
    duration = config_util.GetDefaultDuration(self.config) or _DEFAULT_DURATION
    self.headers = {}
    self.queries = {}
    self.subresource = None
    content_type = None

    for o, a in self.sub_opts:
      if o == '-c':
        content_type = a
      elif o == '-d':
        duration = a
      elif o == '-h':
        (hdr_name, unused_ptn, hdr_val) = a.partition(':')
        if not hdr_name:
          raise CommandException('Header "%s" must be of the form name:value' %
                                 a)
        self.headers[hdr_name] = hdr_val.strip()
      elif o == '-m':
        self.method = a
      elif o == '-q':
        (param, ptn, value) = a.partition('=')
        if not param or not ptn:
          raise CommandException(
              'Query parameter "%s" must be of the form name=value' % a)
        self.queries[param] = value
      elif o == '-s':
        self.subresource = a

    if content_type is not None:
      self.headers['content-type'] = content_type
    self.method = signurl_helper.NormalizeMethod(self.method)
    self.duration = _DurationToSeconds(duration)

    if self.args and not self.args[0].startswith('gs://'):
      self.key_file = self.args.pop(0)
    else:
      self.key_file = config_util.GetServiceKeyFile(self.config)
    if not self.key_file:
      raise CommandException(
          'No keystore file given and no service_key_file configured')
    if not self.args:
      raise CommandException('The signurl command requires at least one URL')

  def RunCommand(self):
    """Command entry point for the signurl command."""
    self.ParseOpts()
    key = ReadKeyFile(self.key_file)

    # One instant serves every URL and the reported expiration.
    now = signurl_helper.UtcNow().replace(microsecond=0)
    expiration = now + datetime.timedelta(seconds=self.duration)

    print('URL\tHTTP Method\tExpiration\tSigned URL')
    for url_str in self.args:
      bucket, object_name = _SplitStorageUrl(url_str)
      final_url = signurl_helper.SignUrl(
          bucket,
          object_name,
          self.method,
          key.client_email,
          key.private_key,
          expires=self.duration,
          headers=self.headers,
          queries=self.queries,
          subresource=self.subresource,
          signing_time=now,
          logger=self.logger,
          string_to_sign_debug=(self.debug > 2))
      print('%s\t%s\t%s\t%s' % (url_str, self.method,
                                expiration.strftime('%Y-%m-%d %H:%M:%S'),
                                final_url))
    return 0
