"""
测试公共夹具
"""

import pytest

ENV_NAMES = [
    "TEXWRITE_TITLE",
    "TEXWRITE_AUTHOR",
    "TEXWRITE_DATE",
    "TEXWRITE_DOCUMENT_CLASS",
    "TEXWRITE_CLASS_OPTIONS",
    "TEXWRITE_PACKAGES",
    "TEXWRITE_AUTO_PACKAGES",
    "TEXWRITE_COLUMN_ALIGN",
    "TEXWRITE_TABULAR_BORDERS",
    "TEXWRITE_FIGURE_PLACEMENT",
    "TEXWRITE_CENTER_FIGURES",
    "TEXWRITE_ENCODING",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """清空 TEXWRITE_* 环境变量，并切换到临时目录（避免读取项目中的 .env）"""
    # setenv 先记录原值，测试结束后 load_dotenv 写入的变量会被一并清除
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
