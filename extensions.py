# extensions.py — service container attached to the Flask app
from __future__ import annotations
from dataclasses import dataclass

from flask import current_app

from config import Settings
from services.folders import FolderResolver
from services.storage import ObjectStorage
from services.uploader import MediaUploader
from services.wix_data import WixDataClient
from services.wix_media import WixMediaClient


@dataclass
class Services:
    settings: Settings
    data: WixDataClient
    media: WixMediaClient
    storage: ObjectStorage
    resolver: FolderResolver
    uploader: MediaUploader

    @classmethod
    def build(cls, settings: Settings, session=None, uploader_backend=None) -> "Services":
        data = WixDataClient(settings.wix, session=session)
        media = WixMediaClient(settings.wix, session=session)
        storage = ObjectStorage(settings.storage, uploader=uploader_backend)
        resolver = FolderResolver(media, settings.wix.root_folder_id, settings.wix.default_folder_id)
        uploader = MediaUploader(storage, media, resolver, settings.limits)
        return cls(settings, data, media, storage, resolver, uploader)


def init_app(app, services: Services) -> None:
    app.extensions["admin"] = services


def services() -> Services:
    return current_app.extensions["admin"]
