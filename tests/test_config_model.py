import os

from homegoing.config import ConfigError
from homegoing.config_model import ConfigKeys, ConfigLoadedMsg, ConfigModel
from homegoing.module import LinkStatus
from homegoing.module_model import StatusMsg
from homegoing.tui import KeyMsg

CONFIG_TEXT = """
src = "dots"
dest = "home"

[[modules]]
src = "bashrc"
tags = ["shell"]

[[modules]]
src = "vimrc"
tags = ["editor", "shell"]
"""

EXTRA_MODULE = """
[[modules]]
src = "zshrc"
tags = ["shell"]
"""


def _messages(cmd):
    if cmd is None:
        return []
    result = cmd()
    if isinstance(result, tuple):
        out = []
        for sub in result:
            out.extend(_messages(sub))
        return out
    return [] if result is None else [result]


def _settle(model, cmd):
    pending = _messages(cmd)
    while pending:
        msg = pending.pop(0)
        pending.extend(_messages(model.update(msg)))


def _setup(tmp_path):
    (tmp_path / "dots").mkdir()
    (tmp_path / "dots" / "bashrc").write_text("x")
    (tmp_path / "dots" / "vimrc").write_text("y")
    config = tmp_path / "dotfiles.toml"
    config.write_text(CONFIG_TEXT)
    return str(config)


def _loaded(tmp_path):
    model = ConfigModel(_setup(tmp_path))
    _settle(model, model.init())
    return model


def test_load_cmd_returns_loaded_message(tmp_path):
    model = ConfigModel(_setup(tmp_path))
    msg = model.load_cmd()()
    assert isinstance(msg, ConfigLoadedMsg)
    assert len(msg.config) == 2


def test_load_cmd_reports_missing_file(tmp_path):
    model = ConfigModel(str(tmp_path / "missing.toml"))
    result = model.init()()
    assert isinstance(result, ConfigError)
    model.update(result)
    assert model.view() == " \n\n"


def test_tags_sorted_with_all(tmp_path):
    model = _loaded(tmp_path)
    names = [tag.tag for tag in model.tags]
    assert names == sorted(names)
    assert set(names) == {"All", "editor", "shell"}
    counts = {tag.tag: len(tag.modules) for tag in model.tags}
    assert counts["All"] == 2
    assert counts["shell"] == 2
    assert counts["editor"] == 1


def test_modules_shared_between_tags(tmp_path):
    model = _loaded(tmp_path)
    shell = next(tag for tag in model.tags if tag.tag == "shell")
    assert all(any(m is n for n in model.modules) for m in shell.modules)


def test_statuses_resolved_after_init(tmp_path):
    model = _loaded(tmp_path)
    assert [m.status for m in model.modules] == [LinkStatus.UNLINKED] * 2


def test_link_key_links_selected_module(tmp_path):
    model = _loaded(tmp_path)
    keys = ConfigKeys()
    _settle(model, model.update(KeyMsg(keys.link.keys[0])))
    first = model.modules[0]
    assert first.status is LinkStatus.LINKED
    assert os.path.islink(first.module.dest)
    assert model.modules[1].status is LinkStatus.UNLINKED

    _settle(model, model.update(KeyMsg(keys.unlink.keys[0])))
    assert first.status is LinkStatus.UNLINKED
    assert not os.path.lexists(first.module.dest)


def test_status_message_for_other_id_ignored(tmp_path):
    model = _loaded(tmp_path)
    ids = {m.id for m in model.modules}
    model.update(StatusMsg(max(ids) + 1000, LinkStatus.LINKED))
    assert all(m.status is LinkStatus.UNLINKED for m in model.modules)


def test_navigation_clamps(tmp_path):
    model = _loaded(tmp_path)
    keys = ConfigKeys()
    for _ in range(5):
        model.update(KeyMsg(keys.right.keys[0]))
    assert model.tag_index == len(model.tags) - 1
    for _ in range(5):
        model.update(KeyMsg(keys.left.keys[0]))
    assert model.tag_index == 0
    for _ in range(5):
        model.update(KeyMsg(keys.down.keys[0]))
    assert model.index == len(model.tags[0].modules) - 1
    assert model.tags[0].index == model.index
    for _ in range(5):
        model.update(KeyMsg(keys.up.keys[0]))
    assert model.index == 0
    assert model.tags[0].index == 0


def test_switching_to_smaller_tag_clamps_index(tmp_path):
    model = _loaded(tmp_path)
    keys = ConfigKeys()
    model.update(KeyMsg(keys.down.keys[0]))
    editor_pos = [tag.tag for tag in model.tags].index("editor")
    while model.tag_index < editor_pos:
        model.update(KeyMsg(keys.right.keys[0]))
    assert model.index == len(model.tags[editor_pos].modules) - 1
    assert model.tags[editor_pos].index == model.index


def test_keys_before_load_do_nothing(tmp_path):
    model = ConfigModel(str(tmp_path / "dotfiles.toml"))
    keys = ConfigKeys()
    for binding in (keys.left, keys.right, keys.up, keys.down):
        assert model.update(KeyMsg(binding.keys[0])) is None
    assert (model.index, model.tag_index) == (0, 0)


def test_refresh_returns_load_command(tmp_path):
    model = _loaded(tmp_path)
    with open(tmp_path / "dotfiles.toml", "a") as handle:
        handle.write(EXTRA_MODULE)
    cmd = model.update(KeyMsg(ConfigKeys().refresh.keys[0]))
    msg = cmd()
    assert isinstance(msg, ConfigLoadedMsg)
    assert len(msg.config) == 3


def test_view_lists_tags_and_modules(tmp_path):
    model = _loaded(tmp_path)
    text = model.view()
    assert " All (2) " in text
    assert "bashrc" in text and "vimrc" in text
    assert ">" in text


def test_view_before_load_has_no_tags(tmp_path):
    model = ConfigModel(str(tmp_path / "dotfiles.toml"))
    assert model.view() == " \n\n"