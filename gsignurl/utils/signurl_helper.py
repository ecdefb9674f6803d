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
"""Utility functions for producing V4 signed URLs.

A signed URL is produced in five steps, each feeding only the next:

1. NormalizeInputs validates the method and expiration, lower-cases and
   sorts the headers, and captures the signing time once.
2. CreateCanonicalRequest renders the canonical request text.
3. CreateStringToSign hashes it and binds it to the credential scope.
4. SignString signs that with the service account's RSA key.
5. GetFinalUrl joins host, path, query string and signature.
"""

import base64
import collections
import datetime
import hashlib
import urllib.parse

from gsignurl.exception import InvalidExpirationError
from gsignurl.exception import SigningError
from gsignurl.exception import UnsupportedMethodError
from gsignurl.utils.constants import DEFAULT_SIGNED_URL_DURATION_SEC
from gsignurl.utils.constants import HOST_SUFFIX
from gsignurl.utils.constants import MAX_SIGNED_URL_DURATION_SEC
from gsignurl.utils.constants import SIGNING_ALGO
from gsignurl.utils.constants import SIGNING_REGION
from gsignurl.utils.constants import SIGNING_REQUEST_TYPE
from gsignurl.utils.constants import SIGNING_SERVICE
from gsignurl.utils.constants import SUPPORTED_METHODS
from gsignurl.utils.constants import UNSIGNED_PAYLOAD
from gsignurl.utils.constants import UTF8
from gsignurl.utils.credentials_helper import LoadSigner
from gsignurl.utils.credentials_helper import ReadKeyFile

_CANONICAL_REQUEST_FORMAT = ('{method}\n{resource}\n{query_string}\n{headers}'
                             '\n{signed_headers}\n{hashed_payload}')
_STRING_TO_SIGN_FORMAT = ('{signing_algo}\n{request_time}\n{credential_scope}'
                          '\n{hashed_request}')
_CREDENTIAL_SCOPE_FORMAT = '{date}/{region}/{service}/{request_type}'
_SIGNED_URL_FORMAT = ('https://{host}{path}?{query_string}'
                      '&x-goog-signature={sig}')

SigningTime = collections.namedtuple('SigningTime',
                                     ['request_timestamp', 'datestamp'])

NormalizedInputs = collections.namedtuple('NormalizedInputs', [
    'method', 'host', 'headers', 'queries', 'subresource', 'expires',
    'signing_time'
])

CanonicalRequest = collections.namedtuple('CanonicalRequest', [
    'text', 'canonical_uri', 'canonical_query_string', 'signed_headers'
])


def UtcNow():
  return datetime.datetime.now(datetime.timezone.utc)


def NormalizeMethod(method):
  """Returns the upper-cased HTTP method.

  Raises:
    UnsupportedMethodError: if method is not a str naming a supported verb.
  """
  if not isinstance(method, str):
    raise UnsupportedMethodError('HTTP method must be a string, got %r' %
                                 (method,))
  http_method = method.upper()
  if http_method not in SUPPORTED_METHODS:
    raise UnsupportedMethodError(
        'HTTP method must be one of [%s], got %r' %
        ('|'.join(SUPPORTED_METHODS), method))
  return http_method


def _ValidateExpiration(expires):
  if isinstance(expires, bool) or not isinstance(expires, int):
    raise InvalidExpirationError(
        'Expiration must be an integer number of seconds, got %r' % (expires,))
  if not 0 < expires <= MAX_SIGNED_URL_DURATION_SEC:
    raise InvalidExpirationError(
        'Expiration must be between 1 and %d seconds, got %d' %
        (MAX_SIGNED_URL_DURATION_SEC, expires))


def NormalizeHeaders(headers, host):
  """Lower-cases header names and values and sorts them by name.

  Later names win over earlier ones that lower-case to the same name, and the
  host header is always replaced with the given host.

  Args:
    headers: dict of header name to value.
    host: Value for the host header.

  Returns:
    List of (name, value) tuples sorted by name.
  """
  canonical_headers = {}
  for name, value in headers.items():
    canonical_headers[str(name).lower()] = str(value).lower()
  canonical_headers['host'] = host
  return sorted(canonical_headers.items())


def GetSigningTime(now=None):
  """Derives both request timestamps from a single instant.

  Args:
    now: Optional datetime to sign at. Naive values are taken to be UTC.
        Defaults to the current time.

  Returns:
    SigningTime with the YYYYMMDDTHHMMSSZ timestamp and YYYYMMDD datestamp.
  """
  if now is None:
    now = UtcNow()
  if now.tzinfo is not None:
    now = now.astimezone(datetime.timezone.utc)
  now = now.replace(microsecond=0)
  return SigningTime(request_timestamp=now.strftime('%Y%m%dT%H%M%SZ'),
                     datestamp=now.strftime('%Y%m%d'))


def NormalizeInputs(bucket,
                    method,
                    expires=DEFAULT_SIGNED_URL_DURATION_SEC,
                    headers=None,
                    queries=None,
                    subresource=None,
                    signing_time=None):
  """Validates and normalizes the inputs of a signing request.

  The method is checked first so that nothing else is done for a request
  that can never be signed.

  Returns:
    NormalizedInputs for CreateCanonicalRequest.
  """
  http_method = NormalizeMethod(method)
  _ValidateExpiration(expires)
  host = '{}.{}'.format(bucket, HOST_SUFFIX)
  return NormalizedInputs(method=http_method,
                          host=host,
                          headers=NormalizeHeaders(headers or {}, host),
                          queries=dict(queries or {}),
                          subresource=subresource,
                          expires=expires,
                          signing_time=GetSigningTime(signing_time))


def GetCanonicalUri(object_name):
  # '/' separates path segments and is kept as is.
  return '/' + urllib.parse.quote(object_name, safe='/~', encoding=UTF8)


def GetCredentialScope(datestamp):
  return _CREDENTIAL_SCOPE_FORMAT.format(date=datestamp,
                                         region=SIGNING_REGION,
                                         service=SIGNING_SERVICE,
                                         request_type=SIGNING_REQUEST_TYPE)


def GetCanonicalQueryString(query_params):
  """Form-encodes query parameters and joins them sorted by encoded name."""
  encoded_params = [(urllib.parse.quote_plus(str(param)),
                     urllib.parse.quote_plus(str(value)))
                    for param, value in query_params.items()]
  return '&'.join(
      '{}={}'.format(param, value) for param, value in sorted(encoded_params))


def CreateCanonicalRequest(normalized, object_name, client_email):
  """Builds the canonical request for a normalized signing request.

  Args:
    normalized: NormalizedInputs from NormalizeInputs.
    object_name: Unencoded name of the object to sign for.
    client_email: Service account email, used in the credential parameter.

  Returns:
    CanonicalRequest whose text is the input to CreateStringToSign.
  """
  signing_time = normalized.signing_time
  credential_scope = GetCredentialScope(signing_time.datestamp)
  signed_headers = ';'.join(name for name, _ in normalized.headers)

  query_params = {
      'X-Goog-Algorithm': SIGNING_ALGO,
      'X-Goog-Credential': client_email + '/' + credential_scope,
      'X-Goog-Date': signing_time.request_timestamp,
      'X-Goog-Expires': '%d' % normalized.expires,
      'X-Goog-SignedHeaders': signed_headers,
  }
  query_params.update(normalized.queries)
  if normalized.subresource is not None:
    query_params[normalized.subresource] = ''

  canonical_uri = GetCanonicalUri(object_name)
  canonical_query_string = GetCanonicalQueryString(query_params)
  canonical_headers = ''.join(
      '{}:{}\n'.format(name, value) for name, value in normalized.headers)

  text = _CANONICAL_REQUEST_FORMAT.format(method=normalized.method,
                                          resource=canonical_uri,
                                          query_string=canonical_query_string,
                                          headers=canonical_headers,
                                          signed_headers=signed_headers,
                                          hashed_payload=UNSIGNED_PAYLOAD)
  return CanonicalRequest(text=text,
                          canonical_uri=canonical_uri,
                          canonical_query_string=canonical_query_string,
                          signed_headers=signed_headers)


def CreateStringToSign(canonical_request, signing_time):
  hashed_canonical_request = hashlib.sha256(
      canonical_request.encode(UTF8)).hexdigest()
  return _STRING_TO_SIGN_FORMAT.format(
      signing_algo=SIGNING_ALGO,
      request_time=signing_time.request_timestamp,
      credential_scope=GetCredentialScope(signing_time.datestamp),
      hashed_request=hashed_canonical_request)


def SignString(string_to_sign, private_key_pem):
  """Signs with RSASSA-PKCS1-v1_5/SHA-256 and returns lower-case hex.

  Raises:
    KeyDecodeError: if private_key_pem is not a usable RSA private key.
    SigningError: if the key rejects the input.
  """
  signer = LoadSigner(private_key_pem)
  try:
    raw_signature = signer.sign(string_to_sign.encode(UTF8))
  except (ValueError, TypeError) as e:
    raise SigningError('Could not sign request: %s' % e)
  return base64.b16encode(raw_signature).lower().decode(UTF8)


def GetFinalUrl(host, canonical_uri, canonical_query_string, signature):
  return _SIGNED_URL_FORMAT.format(host=host,
                                   path=canonical_uri,
                                   query_string=canonical_query_string,
                                   sig=signature)


def SignUrl(bucket,
            object_name,
            method,
            client_email,
            private_key_pem,
            expires=DEFAULT_SIGNED_URL_DURATION_SEC,
            headers=None,
            queries=None,
            subresource=None,
            signing_time=None,
            logger=None,
            string_to_sign_debug=False):
  """Produces a V4 signed URL for an object.

  Args:
    bucket: Bucket name.
    object_name: Unencoded object name.
    method: HTTP method the URL is valid for, in any case.
    client_email: Service account email.
    private_key_pem: Service account PEM private key.
    expires: Lifetime of the URL in seconds. Must be a positive int no
        larger than 604800 (7 days), the longest lifetime Cloud Storage
        accepts for a V4 signature.
    headers: dict of headers the request must carry.
    queries: dict of extra query parameters to sign.
    subresource: Optional subresource name, signed as an empty parameter.
    signing_time: Optional datetime to sign at, defaults to now.
    logger: logging.Logger for debug output.
    string_to_sign_debug: If True, log the canonical request and string to
        sign to logger at debug level.

  Returns:
    The signed URL.

  Raises:
    UnsupportedMethodError, InvalidExpirationError, KeyDecodeError,
    SigningError.
  """
  normalized = NormalizeInputs(bucket,
                               method,
                               expires=expires,
                               headers=headers,
                               queries=queries,
                               subresource=subresource,
                               signing_time=signing_time)
  canonical_request = CreateCanonicalRequest(normalized, object_name,
                                             client_email)
  string_to_sign = CreateStringToSign(canonical_request.text,
                                      normalized.signing_time)

  if string_to_sign_debug and logger:
    logger.debug(
        'Canonical request (ignore opening/closing brackets): [[[%s]]]',
        canonical_request.text)
    logger.debug('String to sign (ignore opening/closing brackets): [[[%s]]]',
                 string_to_sign)

  signature = SignString(string_to_sign, private_key_pem)
  return GetFinalUrl(normalized.host, canonical_request.canonical_uri,
                     canonical_request.canonical_query_string, signature)


def SignUrlWithKeyFile(key_file_path, bucket, object_name, method, **kwargs):
  """Like SignUrl, but reads the credentials from a JSON key file.

  Raises:
    CredentialReadError, CredentialParseError, and everything SignUrl raises.
  """
  NormalizeMethod(method)
  key = ReadKeyFile(key_file_path)
  return SignUrl(bucket, object_name, method, key.client_email,
                 key.private_key, **kwargs)
