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
"""gsignurl exceptions.

Every failure of the signing pipeline is raised as a distinct subclass of
SignUrlException so callers can tell them apart. None of them are retried;
the same inputs always reproduce the same failure.
"""


class CommandException(Exception):
  """Exception raised when a problem is encountered running a command.

  Attributes:
    reason: Human readable description of the problem.
    informational: If True, the reason is printed without the
        "CommandException:" prefix.
  """

  def __init__(self, reason, informational=False):
    Exception.__init__(self, reason)
    self.reason = reason
    self.informational = informational

  def __repr__(self):
    return str(self)

  def __str__(self):
    return 'CommandException: %s' % self.reason


class SignUrlException(Exception):
  """Base class for failures while producing a signed URL."""

  def __init__(self, reason):
    Exception.__init__(self, reason)
    self.reason = reason

  def __repr__(self):
    return str(self)

  def __str__(self):
    return '%s: %s' % (self.__class__.__name__, self.reason)


class UnsupportedMethodError(SignUrlException):
  """The HTTP method is not one of the verbs a signed URL may carry."""


class InvalidExpirationError(SignUrlException):
  """The expiration is not a whole number of seconds in the allowed range."""


class CredentialReadError(SignUrlException):
  """The service account key file could not be read."""


class CredentialParseError(SignUrlException):
  """The service account key is not valid JSON or lacks required fields."""


class KeyDecodeError(SignUrlException):
  """The PEM private key could not be decoded into an RSA private key."""


class SigningError(SignUrlException):
  """The RSA signing primitive rejected the key or the input."""
