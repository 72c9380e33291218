"""Retention for generated resume artifacts."""
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SCORES_SUFFIX = "_scores.json"


def artifact_stem(path: Path) -> str:
    """Shared stem of a ``.yaml``/``.pdf``/``_scores.json`` triple."""
    name = path.name
    if name.endswith(SCORES_SUFFIX):
        return name[: -len(SCORES_SUFFIX)]
    return path.stem


def prune_tailored_resumes(output_dir: Path, keep_latest: int) -> int:
    """Keep the newest ``keep_latest`` resumes, ordered by file mtime.

    Every file of a pruned resume is removed together.

    Returns:
        Number of resumes removed.
    """
    if keep_latest < 0 or not output_dir.exists():
        return 0

    groups: dict[str, list[Path]] = {}
    for path in output_dir.iterdir():
        if not path.is_file():
            continue
        if path.suffix not in (".yaml", ".pdf") and not path.name.endswith(SCORES_SUFFIX):
            continue
        groups.setdefault(artifact_stem(path), []).append(path)

    def newest(files: list[Path]) -> float:
        return max(f.stat().st_mtime for f in files)

    ordered = sorted(groups.values(), key=newest, reverse=True)
    removed = 0
    for files in ordered[keep_latest:]:
        for path in files:
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")
        removed += 1

    if removed:
        logger.info(f"Pruned {removed} old tailored resume(s), kept {keep_latest}")
    return removed
