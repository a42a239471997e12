"""Qt context-menu integration for the clone commands."""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..core.config import LOG_LEVELS, load_settings
from ..core.exceptions import MatCloneError
from ..core.host import EditorContext
from ..core.models import CloneResult, CloneSettings
from ..version import get_version
from .commands import COMMANDS, MenuCommand
from .logging_utils import configure_logging, set_base_log_level
from .qt_compat import QAction, QMenu

logger = logging.getLogger(__name__)

SettingsLoader = Callable[[], CloneSettings]


def _default_settings_loader(path: Optional[Path] = None) -> SettingsLoader:
    def _load() -> CloneSettings:
        try:
            return load_settings(path)
        except MatCloneError as exc:
            logger.warning("Using default settings: %s", exc)
            return CloneSettings()

    return _load


def _run_command(
    command: MenuCommand, context: EditorContext, load: SettingsLoader
) -> Optional[CloneResult]:
    settings = load()
    level = LOG_LEVELS.get(settings.log_level)
    if level is not None:
        set_base_log_level(level)
    return command.run(context, settings=settings)


def install_context_menu(
    menu: QMenu,
    context: EditorContext,
    settings_loader: Optional[SettingsLoader] = None,
) -> List[QAction]:
    """Add one action per clone command to ``menu``.

    Actions are enabled only while a node is selected; the state is refreshed
    each time the menu is about to show.

    Args:
        menu: Host context menu.
        context: Editor context passed to the commands.
        settings_loader: Optional callable returning clone settings.

    Returns:
        List[QAction]: The created actions, in command order.
    """
    load = settings_loader or _default_settings_loader()
    actions: List[QAction] = []
    for command in COMMANDS:
        action = menu.addAction(command.label)
        action.triggered.connect(
            lambda _checked=False, cmd=command: _run_command(cmd, context, load)
        )
        actions.append(action)

    def _refresh() -> None:
        for action, command in zip(actions, COMMANDS):
            action.setEnabled(command.is_enabled(context))

    menu.aboutToShow.connect(_refresh)
    _refresh()
    return actions


def start_plugin(
    menu: QMenu, context: EditorContext, settings_path: Optional[Path] = None
) -> List[QAction]:
    """Configure logging and register the clone commands on ``menu``."""
    configure_logging()
    logger.info("Registering material clone commands (v%s).", get_version())
    return install_context_menu(
        menu, context, settings_loader=_default_settings_loader(settings_path)
    )
