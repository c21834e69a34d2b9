import importlib
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Importing the settings module runs load_dotenv(); clear STUDIO_MCP_* only
# afterwards so neither a developer's .env nor their shell reaches the tests,
# then rebuild the module-level defaults from the cleaned environment.
_settings_module = importlib.import_module("studio_mcp.config.settings")
for _name in [key for key in os.environ if key.startswith("STUDIO_MCP_")]:
    os.environ.pop(_name)
_settings_module.settings = _settings_module.Settings.load()
sys.modules["studio_mcp.config"].settings = _settings_module.settings
