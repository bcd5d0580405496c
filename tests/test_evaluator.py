"""End-to-end tests for the evaluation driver."""

import textwrap

from diffgrade.config.schema import DetectorsConfig, DiffgradeConfig
from diffgrade.detectors.models import DetectionStatus
from diffgrade.detectors.registry import build_registry
from diffgrade.evaluator.engine import evaluate
from diffgrade.git.diff_parser import parse_diff

EXTRA_FILE_DIFF = textwrap.dedent("""\
    diff --git a/src/debug.ts b/src/debug.ts
    new file mode 100644
    index 0000000..1111111
    --- /dev/null
    +++ b/src/debug.ts
    @@ -0,0 +1 @@
    +console.log('debug');
""")


def _only(detector_id: str):
    return build_registry(DiffgradeConfig(detectors=DetectorsConfig(enable=[detector_id])))


class TestEvaluate:
    def test_identical_change_scores_full(
        self, golden_theme_diff, candidate_theme_correct_diff, registry
    ):
        result = evaluate(
            parse_diff(golden_theme_diff), parse_diff(candidate_theme_correct_diff), registry
        )
        assert result.score.overall == 100.0
        assert result.score.file_coverage == 100.0
        assert [fd.detection.detector_id for fd in result.graded()] == ["theme-dark-removal"]
        assert result.noise == ()

    def test_one_detection_per_enabled_detector(self, golden_theme_diff, registry):
        golden = parse_diff(golden_theme_diff)
        result = evaluate(golden, golden, registry)
        assert len(result.detections) == len(registry.enabled_detectors())
        assert len(result.file_results[0].detections) == 24

    def test_readded_prop(self, golden_theme_diff, candidate_theme_readded_diff):
        result = evaluate(
            parse_diff(golden_theme_diff),
            parse_diff(candidate_theme_readded_diff),
            _only("theme-dark-removal"),
        )
        assert [fd.detection.status for fd in result.detections] == [DetectionStatus.INCORRECT]
        fr = result.file_results[0]
        assert fr.has_issues
        assert [n.category for n in fr.noise] == ["incorrect_migration"]
        # 0.2 + 0.65 * 0.25 + 0.15 * 0.97
        assert result.score.overall == 50.8

    def test_missed_file(self, golden_theme_diff):
        result = evaluate(parse_diff(golden_theme_diff), [], _only("theme-dark-removal"))
        assert result.match.missed
        fr = result.file_results[0]
        assert fr.status == "missed"
        assert fr.detections[0].status is DetectionStatus.FILE_MISSING
        assert result.score.file_coverage == 0.0
        assert result.score.pattern_score == 0.0
        assert result.score.overall == 15.0

    def test_extra_file_noise(self, golden_theme_diff, candidate_theme_correct_diff):
        candidate = parse_diff(candidate_theme_correct_diff) + parse_diff(EXTRA_FILE_DIFF)
        result = evaluate(
            parse_diff(golden_theme_diff), candidate, _only("theme-dark-removal")
        )
        assert [r.path for r in result.match.extra] == ["src/debug.ts"]
        assert sorted(n.category for n in result.noise) == ["artifact", "unnecessary_change"]
        # extra files have no file result to attach noise to
        assert all(fr.noise == [] for fr in result.file_results)
        assert result.score.noise_penalty == 6.0

    def test_empty_diffs(self, registry):
        result = evaluate([], [], registry)
        assert result.score.overall == 100.0
        assert result.file_results == []

    def test_structure_toggle(self, golden_theme_diff, registry):
        golden = parse_diff(golden_theme_diff)
        on = evaluate(golden, golden, registry, use_structure=True)
        off = evaluate(golden, golden, registry, use_structure=False)
        assert on.score == off.score

    def test_sources_feed_structured_views(self):
        golden = parse_diff(textwrap.dedent("""\
            diff --git a/src/B.tsx b/src/B.tsx
            --- a/src/B.tsx
            +++ b/src/B.tsx
            @@ -1,1 +1,1 @@
            -<Button variant="plain"><TimesIcon /></Button>
            +<Button variant="plain" icon={<TimesIcon />} />
        """))
        candidate = parse_diff(textwrap.dedent("""\
            diff --git a/src/B.tsx b/src/B.tsx
            --- a/src/B.tsx
            +++ b/src/B.tsx
            @@ -1,1 +1,3 @@
            -<Button variant="plain"><TimesIcon /></Button>
            +<Button
            +  variant="plain"
            +  icon={<TimesIcon />} />
        """))
        registry = _only("button-icon-prop")
        result = evaluate(
            golden,
            candidate,
            registry,
            candidate_sources={"src/B.tsx": '<Button variant="plain" icon={<TimesIcon />} />'},
        )
        assert result.detections[0].detection.status is DetectionStatus.CORRECT
