"""filehasher - MD5/SHA-1/SHA-256/SHA-512 digests of text and files.

Author: Michael Economou
"""

from filehasher.config import APP_VERSION

__version__ = APP_VERSION
