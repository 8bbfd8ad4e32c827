from .version import __version__ as __version__

__title__ = "StreamCrypt"
__description__ = "RC4 and ChaCha20-Poly1305 file encryption toolkit."
__author__ = "Saudade Z"
__email__ = "saudadez217@gmail.com"
__license__ = "Apache-2.0"
