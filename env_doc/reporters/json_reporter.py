"""
JSON 报告器 - 输出可供机器读取的 JSON
"""

import json

from env_doc.core.models import EnvData, env_data_from_dict, env_data_to_dict


class JsonReporter:
    """JSON 报告器"""

    format_name = "json"
    default_filename = "ENV.json"

    def render(self, data: EnvData) -> str:
        return json.dumps(env_data_to_dict(data), indent=2, ensure_ascii=False) + "\n"


def load_json_report(text: str) -> EnvData:
    """解析 JsonReporter 的输出"""
    return env_data_from_dict(json.loads(text))
