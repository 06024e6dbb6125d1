"""
基础测试模块

测试项目的基本功能和导入。
"""

import pytest
from pathlib import Path

project_root = Path(__file__).parent.parent.parent


def test_project_import():
    """测试项目主模块是否可以正常导入"""
    try:
        import tictactoe_vision
        assert tictactoe_vision.__version__ == "0.1.0"
        assert tictactoe_vision.__author__ == "TicTacToe Vision Team"
    except ImportError as e:
        pytest.fail(f"无法导入tictactoe_vision模块: {e}")


def test_submodules_import():
    """测试子模块是否可以正常导入"""
    try:
        from tictactoe_vision.src import board_cells_recognition
        from tictactoe_vision.src.board_cells_recognition import (
            board_model,
            core,
            inference,
            segmentation,
        )

        assert board_cells_recognition.__version__ == "0.1.0"
        assert hasattr(inference, "FrameProcessor")
        assert hasattr(segmentation, "GridOrderer")
        assert hasattr(board_model, "Board")
        assert hasattr(core, "ConfigManager")

    except ImportError as e:
        pytest.fail(f"无法导入子模块: {e}")


def test_config_file_exists():
    """测试配置文件是否存在且有效"""
    from tictactoe_vision.src.board_cells_recognition.core.config import ConfigManager

    config_path = project_root / "tictactoe_vision" / "configs" / "default.yaml"
    assert config_path.exists(), "默认配置文件不存在"

    manager = ConfigManager(str(config_path))
    assert manager.get('ordering.strategy') == 'row_bucket'


def test_main_entry_point():
    """测试主入口文件是否存在"""
    main_file = project_root / "tictactoe_vision" / "main.py"
    assert main_file.exists(), "主入口文件 tictactoe_vision/main.py 不存在"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
