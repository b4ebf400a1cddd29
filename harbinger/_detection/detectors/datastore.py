"""Redis and MongoDB detectors."""

from pathlib import Path
from typing import Callable, Optional, Tuple

from harbinger.shell import CommandRunner
from harbinger.technology import Technology

from ..sources.compose import compose_declares_image, image_version
from ..sources.gemfile import gem_version, lock_mentions_gem, read_gemfile_lock
from ..sources.probes import probe_mongo, probe_redis
from ..utils import first_version
from .base import BaseDetector
from .database import gem_label


class ServiceDetector(BaseDetector):
    """
    Detects a datastore used through a client gem or a compose service.

    Order: compose image version, local binary probe, then the client gem
    version from Gemfile.lock labelled with the gem name. Nothing is probed
    unless the lockfile mentions a client gem or the compose file runs the
    image.
    """

    image_name: str
    gem_names: Tuple[str, ...]
    probe: Callable[[CommandRunner], Optional[str]]

    def is_present(self, project_path: Path) -> bool:
        lock_content = read_gemfile_lock(project_path)
        if any(lock_mentions_gem(lock_content, gem) for gem in self.gem_names):
            return True
        return compose_declares_image(project_path, self.image_name)

    def detect(self, project_path: Path) -> Optional[str]:
        if not self.is_present(project_path):
            return None

        version = first_version(
            self.name,
            [
                ("compose", lambda: image_version(project_path, self.image_name)),
                ("shell", lambda: self.probe(self.runner)),
            ],
        )
        if version:
            return version

        lock_content = read_gemfile_lock(project_path)
        for gem in self.gem_names:
            labelled = gem_label(gem_version(lock_content, gem), gem)
            if labelled:
                return labelled
        return None


class RedisDetector(ServiceDetector):
    technology = Technology.REDIS
    image_name = "redis"
    gem_names = ("redis",)
    probe = staticmethod(probe_redis)


class MongoDetector(ServiceDetector):
    technology = Technology.MONGO
    image_name = "mongo"
    # mongoid is the usual Rails ODM; the bare driver is the fallback
    gem_names = ("mongoid", "mongo")
    probe = staticmethod(probe_mongo)
