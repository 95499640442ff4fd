"""
quarjar - Publish Quarto content to Skilljar

Renders Quarto documents, packages them as zip files for Skilljar web
packages, and talks to the Skilljar REST API to create lessons, content
items, assets and web packages.
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Make key utilities easily importable
from .config_utils import get_config, make_client
from .errors import QuarjarError, ConfigurationError, SkilljarAPIError
from .packager import generate_zip_package
from .skilljar_client import SkilljarClient
from .workflow import use_skilljar_workflow

__all__ = [
    "__version__",
    "get_config",
    "make_client",
    "QuarjarError",
    "ConfigurationError",
    "SkilljarAPIError",
    "generate_zip_package",
    "SkilljarClient",
    "use_skilljar_workflow",
]
