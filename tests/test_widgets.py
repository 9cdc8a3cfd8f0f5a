import tkinter as tk

import pytest

from ui.widgets import toggle_pack


@pytest.fixture
def root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


def test_toggle_pack_shows_then_hides(root):
    label = tk.Label(root, text="detail")
    assert toggle_pack(label, anchor="w") is True
    assert label.winfo_manager() == "pack"
    assert toggle_pack(label) is False
    assert label.winfo_manager() == ""


def test_toggle_pack_hides_packed_widget_that_is_not_mapped(root):
    # the root is withdrawn, so the packed label is never mapped
    label = tk.Label(root, text="detail")
    label.pack()
    root.update_idletasks()
    assert not label.winfo_ismapped()
    assert toggle_pack(label) is False
    assert label.winfo_manager() == ""
