"""Smoke tests for the command line scripts"""
import json
from pathlib import Path

from visited_map.config.params_loader import ParamsLoader
from visited_map.scripts import lint_article, render_map

from fixtures.toy_world import write_toy_world


REPO_ROOT = Path(__file__).resolve().parents[1]


class TestRenderMap:
    def test_main_writes_html(self, tmp_path, capsys):
        data = write_toy_world(tmp_path)
        output = tmp_path / "public" / "index.html"

        code = render_map.main([
            "--data", str(data),
            "--output", str(output),
            "--visited", "fr,de",
            "--planned", "no,zz",
        ])

        assert code == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert "[BUILD_LOG] unmatched_codes" in out
        assert "ZZ" in out
        assert "[BUILD_LOG] map_written" in out

    def test_run_collects_build_log(self, tmp_path):
        data = write_toy_world(tmp_path)
        output = tmp_path / "site" / "index.html"
        params = ParamsLoader(overrides={
            'countries': {'visited': ['FR'], 'planned': ['CA']},
            'data': {'countries_path': str(data)},
            'output': {'html_path': str(output), 'write_params_snapshot': True},
        })

        build_log = []
        assert render_map.run(params, build_log) == 0

        events = [e['event_type'] for e in build_log]
        assert events == ['countries_loaded', 'map_written']
        assert build_log[0]['uncoded'] == ['Somaliland']
        assert build_log[1]['visited'] == 1
        assert build_log[1]['planned'] == 1

        snapshot = json.loads((output.parent / "params_snapshot.json").read_text())
        assert snapshot['countries']['visited'] == ['FR']

    def test_missing_data_file(self, tmp_path, capsys):
        code = render_map.main(["--data", str(tmp_path / "missing.zip"), "--output", str(tmp_path / "x.html")])
        assert code == 1
        assert "Country data not found" in capsys.readouterr().err

    def test_schema_errors_fail(self, tmp_path):
        data = write_toy_world(tmp_path)
        params = ParamsLoader(overrides={
            'data': {'countries_path': str(data), 'iso_columns': ['NOT_A_COLUMN']},
            'output': {'html_path': str(tmp_path / "x.html")},
        })
        assert render_map.run(params) == 1
        assert not (tmp_path / "x.html").exists()


    def test_malformed_codes_in_params_fail(self, tmp_path, capsys):
        data = write_toy_world(tmp_path)
        output = tmp_path / "x.html"
        params = ParamsLoader(overrides={
            'countries': {'visited': ['FRA'], 'planned': ['NO']},
            'data': {'countries_path': str(data)},
            'output': {'html_path': str(output)},
        })

        build_log = []
        assert render_map.run(params, build_log) == 1

        assert [e['event_type'] for e in build_log] == ['code_errors']
        assert any('FRA' in e for e in build_log[0]['errors'])
        assert "[BUILD_LOG] code_errors" in capsys.readouterr().out
        assert not output.exists()

    def test_build_log_written_beside_html(self, tmp_path):
        data = write_toy_world(tmp_path)
        output = tmp_path / "public" / "index.html"
        params = ParamsLoader(overrides={
            'data': {'countries_path': str(data)},
            'output': {'html_path': str(output), 'write_build_log': True},
        })

        assert render_map.run(params) == 0

        lines = (output.parent / "build_log.jsonl").read_text(encoding='utf-8').splitlines()
        events = [json.loads(line)['event_type'] for line in lines]
        assert events[0] == 'countries_loaded'
        assert events[-1] == 'map_written'


class TestLintArticle:
    def test_repo_content_passes(self, capsys):
        post = REPO_ROOT / "content" / "posts" / "visited-countries-map.md"
        workflow = REPO_ROOT / ".github" / "workflows" / "deploy.yml"

        code = lint_article.main([str(post), "--workflow", str(workflow)])

        assert code == 0
        out = capsys.readouterr().out
        assert f"{post}: OK" in out
        assert f"{workflow}: OK" in out

    def test_broken_post_fails(self, tmp_path, capsys):
        post = tmp_path / "broken.md"
        post.write_text("---\ntitle: Only a title\n---\n\n```python\ndef f(:\n```\n", encoding='utf-8')

        code = lint_article.main([str(post), "--skip-workflow", "--json"])

        assert code == 1
        out = capsys.readouterr().out
        reports = json.loads(out[out.index('[\n'):])
        assert len(reports) == 1
        assert any("Missing required field 'author'" in e for e in reports[0]['errors'])
        assert any("(python)" in e for e in reports[0]['errors'])

    def test_missing_workflow_fails(self, tmp_path):
        post = REPO_ROOT / "content" / "posts" / "visited-countries-map.md"
        code = lint_article.main([str(post), "--workflow", str(tmp_path / "nope.yml")])
        assert code == 1

    def test_non_utf8_post_is_reported(self, tmp_path, capsys):
        bad = tmp_path / "bad.md"
        bad.write_bytes(b"---\ntitle: \xff\xfe\n---\n")
        good = REPO_ROOT / "content" / "posts" / "visited-countries-map.md"

        code = lint_article.main([str(bad), str(good), "--skip-workflow"])

        assert code == 1
        out = capsys.readouterr().out
        assert f"{bad}: 1 error(s)" in out
        assert f"{good}: OK" in out
