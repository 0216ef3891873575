"""
Project: Café Menu Service

Description:
Application state shared by the storefront and the admin dashboard. One
instance is created by the caller and handed to each controller.
"""

from dataclasses import dataclass
from typing import Optional

LANGUAGES = ("en", "ckb")
THEMES = ("light", "dark")


@dataclass
class AppState:
    lang: str = "en"
    theme: str = "light"
    admin_logged_in: bool = False
    admin_username: Optional[str] = None

    @property
    def dir(self) -> str:
        return "rtl" if self.lang == "ckb" else "ltr"

    def set_lang(self, lang: str):
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported language: {lang}")
        self.lang = lang

    def toggle_lang(self):
        self.lang = "en" if self.lang == "ckb" else "ckb"

    def toggle_theme(self):
        self.theme = "light" if self.theme == "dark" else "dark"
