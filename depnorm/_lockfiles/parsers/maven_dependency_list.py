"""Parser for Maven ``dependency:list`` output."""

import re

from ...config import ParseOptions
from ...logging_config import logger
from ...models import (
    DEPENDENCY_TYPE_MAVEN,
    SCOPE_DEV,
    SCOPE_IMPORT,
    SCOPE_PROD,
    SCOPE_SYSTEM,
    Dependency,
    ManifestNameSets,
)

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# groupId:artifactId:type[:classifier]:version:scope, then anything
_DEPENDENCY_LINE = re.compile(
    r"^\s+([^:\s]+):([^:\s]+):([^:\s]+):(?:([^:\s]+):)?([^:\s]+):([^:\s\[]+)"
)

_LOG_PREFIX = re.compile(r"^\[(?:INFO|WARNING)\]")

_SCOPE_MAP = {
    "test": SCOPE_DEV,
    "provided": SCOPE_PROD,
    "runtime": SCOPE_PROD,
    "compile": SCOPE_PROD,
    "system": SCOPE_SYSTEM,
    "import": SCOPE_IMPORT,
}


class MavenDependencyListParser:
    """Parser for resolved Maven dependency lists.

    Generate the input with:

        mvn dependency:list -DoutputFile=dependency-list.txt

    Each resolved artifact is one line:

        org.springframework.boot:spring-boot-starter-web:jar:3.2.0:compile -- module spring.boot.starter.web [auto]

    The list holds direct and transitive artifacts alike and does not say
    which is which, so every entry is reported as non-direct and the
    inclusion option does not filter anything.
    """

    name = "maven-dependency-list"
    supported_files = ("dependency-list.txt",)
    ecosystem = DEPENDENCY_TYPE_MAVEN

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content

        dependencies: list[Dependency] = []
        seen: set[str] = set()

        for raw_line in text.splitlines():
            line = _ANSI_ESCAPE.sub("", raw_line)
            # Console output carries a log level prefix before the indentation
            line = _LOG_PREFIX.sub("", line)
            if not line.strip() or "The following files have been resolved:" in line:
                continue

            match = _DEPENDENCY_LINE.match(line)
            if not match:
                continue

            group_id, artifact_id, dep_type, classifier, version, scope = match.groups()
            name = f"{group_id}:{artifact_id}"
            if name in seen:
                continue
            seen.add(name)

            metadata: dict[str, str] = {}
            if dep_type != "jar":
                metadata["type"] = dep_type
            if classifier:
                metadata["classifier"] = classifier
            metadata["source"] = "dependency-list"

            dependencies.append(
                Dependency(
                    type=self.ecosystem,
                    name=name,
                    version=version,
                    scope=map_maven_scope(scope),
                    direct=False,
                    source_file=self.supported_files[0],
                    metadata=metadata,
                )
            )

        logger.debug(f"Maven dependency list: {len(dependencies)} artifact(s)")
        return dependencies


def map_maven_scope(scope: str) -> str:
    """Map a Maven scope onto the shared scope names."""
    return _SCOPE_MAP.get(scope, SCOPE_PROD)
