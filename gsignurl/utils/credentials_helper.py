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
"""Helpers for reading service account keys and building RSA signers."""

import collections
import json

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from google.auth import crypt

from gsignurl.exception import CredentialParseError
from gsignurl.exception import CredentialReadError
from gsignurl.exception import KeyDecodeError
from gsignurl.utils.constants import UTF8

ServiceAccountKey = collections.namedtuple('ServiceAccountKey',
                                           ['client_email', 'private_key'])

_REQUIRED_KEYSTORE_FIELDS = ('client_email', 'private_key')


def ReadJSONKeystore(ks_contents):
  """Parses the contents of a JSON service account key file.

  Args:
    ks_contents: str or bytes contents of the key file.

  Returns:
    ServiceAccountKey holding the client email and PEM private key.

  Raises:
    CredentialParseError: if the contents are not a JSON object holding a
        string client_email and a string private_key.
  """
  if isinstance(ks_contents, bytes):
    try:
      ks_contents = ks_contents.decode(UTF8)
    except UnicodeDecodeError as e:
      raise CredentialParseError('Key file is not UTF-8 encoded: %s' % e)
  try:
    ks = json.loads(ks_contents)
  except ValueError as e:
    raise CredentialParseError('Key file is not valid JSON: %s' % e)
  if not isinstance(ks, dict):
    raise CredentialParseError('Key file does not contain a JSON object')
  missing = [f for f in _REQUIRED_KEYSTORE_FIELDS if not ks.get(f)]
  if missing:
    raise CredentialParseError(
        'JSON keystore doesn\'t contain required fields: %s' %
        ', '.join(missing))
  not_strings = [
      f for f in _REQUIRED_KEYSTORE_FIELDS if not isinstance(ks[f], str)
  ]
  if not_strings:
    raise CredentialParseError(
        'JSON keystore fields must be strings: %s' % ', '.join(not_strings))
  return ServiceAccountKey(ks['client_email'], ks['private_key'])


def ReadKeyFile(key_file_path):
  """Reads and parses a JSON service account key file from disk."""
  try:
    with open(key_file_path, 'rb') as fp:
      ks_contents = fp.read()
  except (IOError, OSError) as e:
    raise CredentialReadError('Could not read key file %s: %s' %
                              (key_file_path, e))
  return ReadJSONKeystore(ks_contents)


def LoadSigner(private_key_pem):
  """Decodes PEM key material into a google.auth RSA signer.

  Args:
    private_key_pem: PEM encoded (PKCS#1 or PKCS#8) unencrypted private key.

  Returns:
    google.auth.crypt.RSASigner wrapping the decoded key.

  Raises:
    KeyDecodeError: if the PEM is empty, malformed, encrypted or not RSA.
  """
  if not private_key_pem:
    raise KeyDecodeError('No private key material provided')
  if isinstance(private_key_pem, str):
    private_key_pem = private_key_pem.encode(UTF8)
  try:
    private_key = serialization.load_pem_private_key(private_key_pem,
                                                     password=None)
  except (ValueError, TypeError, UnsupportedAlgorithm) as e:
    raise KeyDecodeError('Could not decode private key: %s' % e)
  if not isinstance(private_key, rsa.RSAPrivateKey):
    raise KeyDecodeError('Private key is a %s, not an RSA key' %
                         type(private_key).__name__)
  return crypt.RSASigner(private_key)
