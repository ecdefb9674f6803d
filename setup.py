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
"""Setup installation module for gsignurl."""

import os

from setuptools import find_packages
from setuptools import setup

long_desc = """
gsignurl generates V4 signed URLs for Google Cloud Storage objects using
only a service account JSON key file. It does not depend on gcloud or gsutil,
and it never contacts Google Cloud Storage: the signed URL is computed
locally. You can use gsignurl to:
- Hand out time-limited download links to objects.
- Let clients upload, overwrite, or delete a single object without credentials.
- Sign requests that carry specific headers, query parameters or subresources.
"""

requires = [
    'cryptography>=3.1',
    'google-auth>=2.0.0',
]

test_requires = [
    'pytest',
]


def _ReadVersion():
  """Reads VERSION from gsignurl/__init__.py without importing it."""
  init_file = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           'gsignurl', '__init__.py')
  with open(init_file, 'r') as f:
    for line in f:
      if line.startswith('VERSION = '):
        return line.split('=', 1)[1].strip().strip('\'"')
  raise RuntimeError('Can\'t find gsignurl version')


setup(
    name='gsignurl',
    version=_ReadVersion(),
    url='https://cloud.google.com/storage/docs/access-control/signed-urls',
    license='Apache 2.0',
    author='Google Inc.',
    author_email='gs-team@google.com',
    description=('Generates V4 signed URLs for Google Cloud Storage without '
                 'gcloud or gsutil'),
    long_description=long_desc,
    zip_safe=True,
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Utilities',
    ],
    python_requires='>=3.7',
    platforms='any',
    packages=find_packages(),
    include_package_data=True,
    package_data={'gsignurl': ['tests/test_data/*']},
    entry_points={
        'console_scripts': ['gsignurl = gsignurl.__main__:main',],
    },
    install_requires=requires,
    extras_require={'test': test_requires},
)
