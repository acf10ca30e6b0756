"""
Archive builder for Lambda functions.
Builds the zip package submitted to AWS Lambda.
"""
import hashlib
import json
import logging
import os
import tempfile
import zipfile
from typing import Callable, Iterator, Mapping, Optional, Sequence, Tuple

from lambda_integration.exceptions import PackagingError

logger = logging.getLogger(__name__)

ENV_CONFIG_NAME = "env_config.json"
LAMBDA_FLAG = "LAMBDA"

EnvironmentProvider = Callable[[], Mapping[str, str]]


def process_environment() -> Mapping[str, str]:
    """Snapshot of the current process environment."""
    return dict(os.environ)


def _raise_walk_error(error: OSError) -> None:
    raise error


def _walk_files(root: str) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(path, relative_path)`` for every file below root, in sorted order.

    Raises:
        OSError: If root or one of its subdirectories cannot be read
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            yield path, os.path.relpath(path, root)


class ArchiveBuilder:
    """
    Builds Lambda packages from source directories.

    A package contains:
    - Every file of the function's directory, at the root of the archive
    - Every included library directory, under a folder named after it
    - An ``env_config.json`` entry with the environment the package was built in

    Nothing is cached; every build reads the filesystem and the environment again.
    """

    def __init__(
        self,
        environment_provider: Optional[EnvironmentProvider] = None,
        tmp_dir: Optional[str] = None,
    ):
        """
        Initialize the archive builder.

        Args:
            environment_provider: Callable returning the environment to embed.
                If not provided, the process environment is used.
            tmp_dir: Directory for the temporary archive. If not provided,
                the system temporary directory is used.
        """
        self.environment_provider = environment_provider or process_environment
        self.tmp_dir = tmp_dir or tempfile.gettempdir()

    def archive_path(self, primary_path: str) -> str:
        """
        Get the temporary archive path for a function directory.

        The name is a fixed-length digest of the directory path, so builds of
        different functions never share a file.
        """
        digest = hashlib.sha256(os.path.abspath(primary_path).encode("utf-8")).hexdigest()
        return os.path.join(self.tmp_dir, digest + ".zip")

    def _env_config(self) -> str:
        env_config = dict(self.environment_provider())
        env_config[LAMBDA_FLAG] = True
        return json.dumps(env_config)

    def _write_archive(self, archive_path: str, primary_path: str, auxiliary_paths: Sequence[str]) -> None:
        for path in [primary_path, *auxiliary_paths]:
            if not os.path.isdir(path):
                raise PackagingError(f"Source directory {path} does not exist or is not a directory")

        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED, strict_timestamps=False) as archive:
            for path, arcname in _walk_files(primary_path):
                if arcname == ENV_CONFIG_NAME:
                    logger.warning(f"Skipping {path}: {ENV_CONFIG_NAME} is generated at build time")
                    continue
                archive.write(path, arcname)

            for auxiliary_path in auxiliary_paths:
                prefix = os.path.basename(os.path.normpath(auxiliary_path))
                logger.debug(f"Adding {auxiliary_path} to the package under {prefix}/")
                for path, arcname in _walk_files(auxiliary_path):
                    archive.write(path, os.path.join(prefix, arcname))

            archive.writestr(ENV_CONFIG_NAME, self._env_config())

    def build_package(self, primary_path: str, auxiliary_paths: Optional[Sequence[str]] = None) -> bytes:
        """
        Build the zip package of a function.

        Args:
            primary_path: Directory holding the function's code
            auxiliary_paths: Library directories to bundle, in order

        Returns:
            Content of the zip archive

        Raises:
            PackagingError: If a directory cannot be read or the archive cannot be written
        """
        auxiliary_paths = list(auxiliary_paths or [])
        archive_path = self.archive_path(primary_path)

        if os.path.exists(archive_path):
            logger.warning(f"Archive {archive_path} already exists, another build of {primary_path} may be running")

        try:
            self._write_archive(archive_path, primary_path, auxiliary_paths)
            # Only read back once the zip file is closed
            with open(archive_path, "rb") as f:
                package = f.read()
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            logger.error(f"Error building package for {primary_path}: {e}")
            raise PackagingError(f"Could not build package for {primary_path}: {e}") from e
        finally:
            self._remove(archive_path)

        logger.debug(f"Built package of {len(package)} bytes for {primary_path}")
        return package

    def write_package(
        self,
        primary_path: str,
        auxiliary_paths: Optional[Sequence[str]],
        destination: str,
    ) -> str:
        """
        Build the zip package of a function and save it to a file.

        Returns:
            Path of the written file
        """
        package = self.build_package(primary_path, auxiliary_paths)
        try:
            with open(destination, "wb") as f:
                f.write(package)
        except OSError as e:
            logger.error(f"Error writing package to {destination}: {e}")
            raise PackagingError(f"Could not write package to {destination}: {e}") from e

        logger.info(f"Wrote package for {primary_path} to {destination}")
        return destination

    @staticmethod
    def _remove(archive_path: str) -> None:
        try:
            os.remove(archive_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary archive {archive_path}: {e}")
