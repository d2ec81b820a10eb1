"""Explanatory parameter descriptions generated with the OpenAI Responses API.

Descriptions are cached per parameter name only after a successful call, so
a failed request is retried the next time the parameter is asked for.
"""

import logging
from collections.abc import Mapping

from openai import AsyncOpenAI, OpenAIError

from labtrend.config import settings

logger = logging.getLogger(__name__)

DISABLED_MESSAGE = (
    "La generación de descripciones está deshabilitada (API Key no configurada)."
)

_PROMPT_TEMPLATE = (
    "Explica brevemente en español y en un solo párrafo conciso (máximo 4-5 frases) "
    "por qué se mide el parámetro de análisis de sangre '{parameter}', qué indica "
    "principalmente, y qué implicaciones generales para la salud pueden tener sus "
    "valores si están alterados (altos o bajos). No incluyas rangos de referencia "
    "en esta explicación, solo la descripción médica general."
)

PREDEFINED_DESCRIPTIONS: dict[str, str] = {
    "Hemoglobina": (
        "La hemoglobina es la proteína de los glóbulos rojos que transporta el "
        "oxígeno desde los pulmones al resto del cuerpo. Se mide para detectar "
        "anemia o, con menos frecuencia, un exceso de glóbulos rojos. Valores "
        "bajos pueden causar cansancio y falta de aire; valores altos pueden "
        "aparecer en deshidratación o enfermedades pulmonares."
    ),
}


class DescriptionUnavailableError(Exception):
    """Raised when a description could not be generated."""


def build_prompt(parameter: str) -> str:
    """Prompt asking for a short Spanish explanation of a parameter."""
    return _PROMPT_TEMPLATE.format(parameter=parameter)


class DescriptionService:
    """Fetches and caches parameter descriptions.

    Example:
        service = DescriptionService()
        text = await service.get_description("Leucocitos")

        # Testing with mock client
        service = DescriptionService(client=mock_client)
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
        predefined: Mapping[str, str] | None = None,
    ):
        """
        Initialize DescriptionService.

        Args:
            client: Optional pre-configured AsyncOpenAI client (for testing).
                If not provided, one is created when an API key is configured;
                otherwise descriptions are disabled.
            model: Model name. Defaults to settings.description_model.
            predefined: Descriptions that seed the cache.
        """
        if client is not None:
            self._client: AsyncOpenAI | None = client
        elif settings.openai_api_key:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        else:
            self._client = None

        self._model = model or settings.description_model
        self._cache: dict[str, str] = dict(
            PREDEFINED_DESCRIPTIONS if predefined is None else predefined
        )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def cached(self, parameter: str) -> str | None:
        """Return the cached description, if any."""
        return self._cache.get(parameter)

    async def close(self) -> None:
        """Close the OpenAI client connection."""
        if self._client is not None:
            await self._client.close()

    async def get_description(self, parameter: str) -> str:
        """Return the description for a parameter, generating it if needed.

        Args:
            parameter: Parameter name, e.g. "Hemoglobina".

        Returns:
            Description text. When descriptions are disabled, a fixed notice
            (not cached).

        Raises:
            DescriptionUnavailableError: If the API call fails or returns no
                text. Nothing is cached in that case.
        """
        cached = self._cache.get(parameter)
        if cached is not None:
            return cached

        if self._client is None:
            return DISABLED_MESSAGE

        try:
            response = await self._client.responses.create(
                model=self._model,
                input=build_prompt(parameter),
            )
        except OpenAIError as exc:
            logger.warning("Description request failed for %s: %s", parameter, exc)
            raise DescriptionUnavailableError(
                f"Error al contactar el servicio de IA: {exc}"
            ) from exc

        text = (getattr(response, "output_text", None) or "").strip()
        if not text:
            logger.warning("Empty description returned for %s", parameter)
            raise DescriptionUnavailableError(
                "No se pudo obtener la descripción del parámetro."
            )

        self._cache[parameter] = text
        return text
