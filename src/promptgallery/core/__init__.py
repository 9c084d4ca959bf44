"""Core functionality shared by the gateway and the UI.

- **PromptGalleryConfig**: Configuration management using Pydantic Settings
- **UpstreamImageClient**: The single outbound call to the image service
- **GenerationRequest / GenerationResult**: Value objects for one generation
- **Errors**: ValidationError, UpstreamError, GenerationFailed, ConfigurationError

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with PROMPTGALLERY_ in .env files
   - Built explicitly with load_config(); no import-time global

2. **Upstream Layer** (upstream.py):
   - httpx AsyncClient holding the credential
   - Converts every failure into UpstreamError

3. **Support Utilities**:
   - models.py: request/result value objects and image URL extraction
   - validation.py: prompt normalization and gateway-side validation
"""

from promptgallery.core.config import PromptGalleryConfig, load_config
from promptgallery.core.models import GenerationRequest, GenerationResult, extract_image_url
from promptgallery.core.upstream import UpstreamImageClient

__all__ = [
    "PromptGalleryConfig",
    "load_config",
    "GenerationRequest",
    "GenerationResult",
    "extract_image_url",
    "UpstreamImageClient",
]
