"""Project path layout resolution from the config template."""

import json
import logging
from pathlib import Path

from credlify.config.schema import ProjectConfig, UserInput
from credlify.console import console
from credlify.templates.loader import CONFIG_TEMPLATE, read_config_template
from credlify.templates.render import render_placeholders

logger = logging.getLogger(__name__)


def resolve_config(
    user_input: UserInput, template_dir: Path | None = None
) -> ProjectConfig:
    """Render the config template with the user's answers and parse it.

    Returns ProjectConfig.empty() if the template cannot be read, rendered
    text is not valid JSON, or the path layout is invalid. Never raises.
    """
    try:
        raw = read_config_template(template_dir)
    except (OSError, ValueError) as e:
        logger.warning("Could not read config template: %s", e)
        console.print("[red]Config data could not be loaded[/red]")
        return ProjectConfig.empty()

    rendered = render_placeholders(raw, user_input.placeholder_values())

    try:
        data = json.loads(rendered)
        config = ProjectConfig.from_dict(data)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError subclass
        logger.warning("Invalid %s after rendering: %s", CONFIG_TEMPLATE, e)
        console.print(f"[red]Config data could not be parsed: {e}[/red]")
        return ProjectConfig.empty()

    logger.debug("Resolved project config: %s", config)
    return config
