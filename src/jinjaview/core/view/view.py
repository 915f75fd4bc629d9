from __future__ import annotations

"""
Jinja2 View.

The view object applications render through. It locates templates,
layouts and elements on the unit template roots, trying every configured
extension in order, and renders them with a Jinja2 environment whose
loader resolves references through the template trees.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from jinja2 import BaseLoader, Environment, TemplateError

from jinjaview.core.analysis.tree_scanner import TreeScanner
from jinjaview.core.services.registry import UnitRegistry
from jinjaview.core.services.scanner import RelativeScanner
from jinjaview.core.view.environment import build_environment, resolve_config
from jinjaview.core.view.events import ConstructEvent, EventManager, LoaderEvent
from jinjaview.core.view.loader import TreeLoader
from jinjaview.domain.config import get_default_config
from jinjaview.domain.constants import (
    DEFAULT_CHARSET,
    DEFAULT_DELIMITER,
    DEFAULT_LAYOUT,
    ELEMENT_DIR,
    LAYOUT_DIR,
    TEMPLATE_EXT,
)
from jinjaview.domain.errors import MissingLayoutError, MissingTemplateError

logger = logging.getLogger(__name__)


class JinjaView:
    """
    Renders application and plugin templates with Jinja2.

    Usage:
        view = JinjaView(registry, config)
        view.set("title", "Hello")
        html = view.render("posts/index")
    """

    EXT = TEMPLATE_EXT

    def __init__(
            self,
            registry: UnitRegistry,
            config: Optional[Mapping[str, Any]] = None,
            events: Optional[EventManager] = None,
            layout: Union[str, bool] = DEFAULT_LAYOUT,
    ) -> None:
        self.registry = registry
        self.config: Dict[str, Any] = dict(config) if config is not None else get_default_config()
        self.events = events or EventManager()
        self.layout = layout

        self.extensions: List[str] = list(self.config.get("extensions") or [self.EXT])
        self.delimiter: str = self.config.get("delimiter") or DEFAULT_DELIMITER
        self.view_vars: Dict[str, Any] = {}
        self.helpers: Dict[str, Any] = {}
        self.scanner = TreeScanner(
            RelativeScanner(registry, self.extensions, self.delimiter),
            delimiter=self.delimiter,
        )

        self._environment: Optional[Environment] = None
        self.initialize()

    def __str__(self) -> str:
        return ""

    def initialize(self) -> None:
        """Create the loader and the environment, then announce the view."""
        resolved = resolve_config(self.config, self.events)
        self._environment = build_environment(self.get_loader(resolved.get("charset")), resolved)
        self.events.dispatch(ConstructEvent(self, self._environment))

    # -------------------------------------------------------------------------
    # ENVIRONMENT
    # -------------------------------------------------------------------------

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            raise RuntimeError("View environment accessed before initialize().")
        return self._environment

    @environment.setter
    def environment(self, environment: Environment) -> None:
        self._environment = environment

    def get_loader(self, charset: Optional[str] = None) -> BaseLoader:
        """Create the default loader and let listeners replace it."""
        loader = TreeLoader(
            self.registry,
            extensions=self.extensions,
            delimiter=self.delimiter,
            charset=charset or self.config.get("charset", DEFAULT_CHARSET),
        )
        event = self.events.dispatch(LoaderEvent(loader))
        return event.get_result_loader()

    def unshift_extension(self, extension: str) -> None:
        """Give an extension priority over the configured ones."""
        self.extensions.insert(0, extension)

    # -------------------------------------------------------------------------
    # VIEW VARIABLES
    # -------------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        self.view_vars[name] = value

    def add_helper(self, name: str, helper: Any) -> None:
        self.helpers[name] = helper

    # -------------------------------------------------------------------------
    # RENDERING
    # -------------------------------------------------------------------------

    def render(
            self,
            template: str,
            data: Optional[Mapping[str, Any]] = None,
            layout: Union[str, bool, None] = None,
    ) -> str:
        """
        Render a template, wrapped in a layout unless disabled.

        Args:
            template: Template name, optionally ``Plugin.``-prefixed.
            data: Variables; defaults to the view variables.
            layout: Layout name, None for the view default, False for none.

        Returns:
            str: The rendered output.

        Raises:
            MissingTemplateError: If the template or layout file is missing.
        """
        variables = dict(data) if data is not None else dict(self.view_vars)
        content = self._render(self.get_template_filename(template), variables)

        layout_name = self.layout if layout is None else layout
        if not layout_name:
            return content

        variables["content"] = content
        return self._render(self.get_layout_filename(str(layout_name)), variables)

    def element(self, name: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render an element, or return an empty string if none exists."""
        filename = self.get_element_filename(name)
        if filename is None:
            logger.warning(f"Element not found: {name}")
            return ""
        return self._render(filename, dict(data) if data is not None else dict(self.view_vars))

    def _render(self, view_file: str, data: Mapping[str, Any]) -> str:
        variables: Dict[str, Any] = dict(data) if data else dict(self.view_vars)
        variables.update(self.helpers)
        variables["_view"] = self

        try:
            return self.environment.get_template(view_file).render(variables)
        except TemplateError as e:
            # Surface the exception raised inside the template, not the wrapper
            if isinstance(e.__cause__, Exception):
                raise e.__cause__
            raise

    # -------------------------------------------------------------------------
    # FILE LOOKUP (EXTENSION FALLBACK)
    # -------------------------------------------------------------------------

    def get_template_filename(self, name: str) -> str:
        """
        Find the template file, trying every extension in order.

        Raises:
            MissingTemplateError: The error of the last extension tried.
        """
        rethrow = MissingTemplateError(template=name)
        for extension in self.extensions:
            try:
                return self._find_file("", name, extension, MissingTemplateError)
            except MissingTemplateError as e:
                rethrow = e
        raise rethrow

    def get_layout_filename(self, name: str) -> str:
        """
        Find the layout file, trying every extension in order.

        Raises:
            MissingLayoutError: The error of the last extension tried.
        """
        rethrow = MissingLayoutError(layout=name)
        for extension in self.extensions:
            try:
                return self._find_file(LAYOUT_DIR, name, extension, MissingLayoutError)
            except MissingLayoutError as e:
                rethrow = e
        raise rethrow

    def get_element_filename(self, name: str) -> Optional[str]:
        for extension in self.extensions:
            try:
                return self._find_file(ELEMENT_DIR, name, extension, MissingTemplateError)
            except MissingTemplateError:
                continue
        return None

    def _find_file(
            self,
            subdir: str,
            name: str,
            extension: str,
            error: type,
    ) -> str:
        unit, relative = self.registry.split_reference(name)
        if not relative.endswith(extension):
            relative += extension

        parts = [subdir] if subdir else []
        parts.extend(relative.split(self.delimiter))

        searched: List[str] = []
        for root in self.registry.paths_for(unit):
            candidate = os.path.join(root, *parts)
            if os.path.isfile(candidate):
                return candidate
            searched.append(candidate)

        raise error(name=name, extension=extension, searched=searched)
