import json
import os
from pathlib import Path
import tempfile
from unittest import TestCase
from unittest.mock import patch

from infradrift.core.config import InvalidConfigException, StandardsConfig
from infradrift.core.result import InfraScanSummary, ResourceCheckResult
from infradrift.manifest import ManifestError
from infradrift.scan import (
    EXIT_CLEAN,
    EXIT_ERRORS,
    EXIT_MISSING,
    InfraScanner,
    get_exit_code,
    resolve_manifest_path,
    scan_infra,
)

QUEUE_ARN = "arn:aws:sqs:us-east-1:111111111111:jobs"


class MissingChecker:
    def check(self, parsed):
        return ResourceCheckResult(
            arn=parsed.raw,
            exists=False,
            service=parsed.service,
            resource_type=parsed.resource_type,
            resource_id=parsed.resource_id,
        )


class TestScanInfra(TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir_path = Path(self.temp_dir.name)
        self.cwd = os.getcwd()
        os.chdir(self.dir_path)

    def tearDown(self):
        os.chdir(self.cwd)
        self.temp_dir.cleanup()

    def write_manifest(self, relative_path: str) -> Path:
        manifest_path = self.dir_path / relative_path
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text(json.dumps({"project": "my-app", "resources": [QUEUE_ARN]}))
        return manifest_path

    def test_manifest_from_config(self):
        manifest_path = self.write_manifest("infra/manifest.json")
        config_path = self.dir_path / "standards.toml"
        config_path.write_text('[infra]\nenabled = true\nmanifest = "infra/manifest.json"\n')
        with patch("infradrift.scan.scanner.get_checker", return_value=MissingChecker()):
            result = scan_infra(config_path=config_path)
        self.assertEqual(result.manifest, str(manifest_path.resolve()))
        self.assertEqual(result.project, "my-app")
        self.assertEqual(result.summary, InfraScanSummary(total=1, found=0, missing=1, errors=0))

    def test_config_scan_settings_applied_to_scanner(self):
        self.write_manifest("manifest.json")
        config_path = self.dir_path / "standards.toml"
        config_path.write_text(
            "[infra]\nenabled = true\nmanifest = \"manifest.json\"\n\n"
            "[infra.scan]\nconcurrency = 3\nread_timeout = 5.0\n"
        )
        captured = []

        def fake_get_checker(service, scan_settings=None):
            captured.append(scan_settings)
            return MissingChecker()

        scanner = InfraScanner()
        with patch("infradrift.scan.scanner.get_checker", side_effect=fake_get_checker):
            scan_infra(config_path=config_path, scanner=scanner)
        self.assertEqual(scanner.concurrency, 3)
        self.assertEqual(scanner.settings.read_timeout, 5.0)
        self.assertEqual([settings.read_timeout for settings in captured], [5.0])

    def test_explicit_scanner_concurrency_kept(self):
        self.write_manifest("manifest.json")
        config_path = self.dir_path / "standards.toml"
        config_path.write_text("[infra.scan]\nconcurrency = 3\nread_timeout = 5.0\n")
        scanner = InfraScanner(concurrency=7)
        with patch("infradrift.scan.scanner.get_checker", return_value=MissingChecker()):
            scan_infra(manifest_path="manifest.json", config_path=config_path, scanner=scanner)
        self.assertEqual(scanner.concurrency, 7)
        self.assertEqual(scanner.settings.read_timeout, 5.0)

    def test_explicit_manifest_relative_to_cwd(self):
        manifest_path = self.write_manifest("manifest.json")
        with patch("infradrift.scan.scanner.get_checker", return_value=MissingChecker()):
            result = scan_infra(manifest_path="manifest.json")
        self.assertEqual(result.manifest, str(manifest_path.resolve()))

    def test_not_enabled(self):
        (self.dir_path / "standards.toml").write_text("[infra]\nenabled = false\n")
        with self.assertRaisesRegex(ManifestError, "Infra scanning is not enabled"):
            scan_infra()

    def test_no_config(self):
        with self.assertRaises(ManifestError):
            scan_infra()

    def test_missing_explicit_config(self):
        with self.assertRaises(InvalidConfigException):
            scan_infra(config_path=self.dir_path / "missing.toml")

    def test_missing_manifest(self):
        with self.assertRaisesRegex(ManifestError, "not found"):
            scan_infra(manifest_path="missing.json")


class TestResolveManifestPath(TestCase):
    def test_explicit(self):
        self.assertEqual(resolve_manifest_path("/tmp/m.json"), Path("/tmp/m.json").resolve())

    def test_disabled(self):
        with self.assertRaises(ManifestError):
            resolve_manifest_path(config=StandardsConfig())


class TestGetExitCode(TestCase):
    def test_exit_codes(self):
        self.assertEqual(
            get_exit_code(InfraScanSummary(total=2, found=2, missing=0, errors=0)), EXIT_CLEAN
        )
        self.assertEqual(
            get_exit_code(InfraScanSummary(total=2, found=1, missing=1, errors=0)), EXIT_MISSING
        )
        self.assertEqual(
            get_exit_code(InfraScanSummary(total=3, found=1, missing=1, errors=1)), EXIT_ERRORS
        )
