"""
命令行接口测试
"""

import cv2
import numpy as np
import pytest
import yaml
from click.testing import CliRunner

from tictactoe_vision.main import cli

from conftest import draw_board


@pytest.fixture
def quiet_config(tmp_path):
    """关闭控制台日志的配置文件"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.dump({
        'logging': {'level': 'WARNING', 'file': None, 'console_output': False},
    }), encoding='utf-8')
    return str(config_file)


@pytest.fixture
def board_file(tmp_path):
    path = tmp_path / "board.png"
    cv2.imwrite(str(path), draw_board(3))
    return str(path)


class TestCli:
    """测试命令行命令"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_version(self):
        result = self.runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_info(self, quiet_config):
        result = self.runner.invoke(cli, ['info', '--config', quiet_config])

        assert result.exit_code == 0
        assert "row_bucket" in result.output

    def test_show_config(self, quiet_config):
        result = self.runner.invoke(cli, ['show-config', '--config', quiet_config])

        assert result.exit_code == 0
        assert "threshold: 150" in result.output
        assert "level: WARNING" in result.output

    def test_invalid_config_exits(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({'ordering': {'strategy': 'spiral'}}), encoding='utf-8')

        result = self.runner.invoke(cli, ['info', '--config', str(config_file)])

        assert result.exit_code == 1

    def test_process_json(self, quiet_config, board_file):
        result = self.runner.invoke(cli, ['process', board_file, '--config', quiet_config, '--json'])

        assert result.exit_code == 0
        assert '"cells"' in result.output
        assert result.output.count('"empty"') == 9

    def test_process_table(self, quiet_config, board_file):
        result = self.runner.invoke(cli, ['process', board_file, '--config', quiet_config,
                                          '--strategy', 'scan_order'])

        assert result.exit_code == 0
        assert "empty" in result.output

    def test_process_failed_frame(self, quiet_config, board_file, tmp_path):
        blank = tmp_path / "blank.png"
        cv2.imwrite(str(blank), np.zeros((100, 100), dtype=np.uint8))

        result = self.runner.invoke(cli, ['process', board_file, str(blank),
                                          '--config', quiet_config, '--json'])

        assert result.exit_code == 1
        assert "outer_board" in result.output

    def test_process_unreadable_image(self, quiet_config, tmp_path):
        bogus = tmp_path / "bogus.png"
        bogus.write_text("not an image", encoding='utf-8')

        result = self.runner.invoke(cli, ['process', str(bogus), '--config', quiet_config])

        assert result.exit_code == 1
