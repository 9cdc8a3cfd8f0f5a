import tkinter as tk
from tkinter import ttk

from logic import charts
from logic.formatting import (
    ESCALATION_STAGES,
    RISK_FACTOR_EXPLANATIONS,
    difficulty_variant,
    effect_variant,
    gauge_variant,
    highlight_segments,
    risk_level_label,
    similarity_percent,
    similarity_variant,
    speed_variant,
    stage_progress,
    winner_variant,
)
from logic.strategy import CompareLimitError, generate_notice_template, toggle_compare, toggle_report_include
from ui.analysis_frame import AnalysisFrame
from ui.modals import Dialog
from ui.theme import HIGHLIGHT, row_tag, zebra
from ui.widgets import Badge, ChipGroup, ImageLabel, paragraph, section, toggle_pack


def _card_header(parent, title, badge=None, variant="default"):
    row = ttk.Frame(parent, style="Card.TFrame")
    row.pack(fill="x", pady=(14, 6))
    ttk.Label(row, text=title, style="CardTitle.TLabel").pack(side="left")
    if badge:
        Badge(row, badge, variant).pack(side="right")
    return row


class ClassifyFrame(AnalysisFrame):
    analysis_type = "CLASSIFY"
    feature = "classify"
    heading = "Dispute Classification"
    subheading = "Find out which kind of dispute your case is."
    restore_on_show = True
    sample_text = (
        "Hello, I bought an electronic device from an online shop.\n"
        "Three days after delivery I asked to withdraw from the purchase, but the seller refuses "
        "a refund because the package was opened.\n"
        "As far as I know the e-commerce act allows withdrawal within 7 days,\n"
        "yet the seller insists on its own no-return policy.\n"
        "I lost about 500,000 KRW because of this and I think the charge is unfair.\n"
        "I plan to report it to the consumer agency and will consider legal action if needed."
    )

    def render_result(self, panel, result):
        _card_header(panel, f"Result: {result.top_label}", "Top label", "primary")
        ImageLabel(panel, charts.bar_chart([(s.label, s.score) for s in result.scores])).pack(anchor="w")

        section(panel, "Keywords")
        ChipGroup(panel, result.keywords).pack(anchor="w")

        section(panel, "Explanation")
        paragraph(panel, result.explanation)


class RiskFrame(AnalysisFrame):
    analysis_type = "RISK"
    feature = "risk"
    heading = "Legal Risk Prediction"
    subheading = "Estimate how likely a letter or notice is to end up in court."
    restore_on_show = True
    sample_text = (
        "We hereby formally notify you by this letter.\n"
        "Your breach of Article 5 of the contract has caused us damages of about 50 million KRW.\n"
        "If this matter is not resolved within 14 days, we will file civil and criminal actions.\n"
        "We have already retained legal counsel and are ready to take every legal step.\n"
        "We demand fair compensation for the unilateral termination and await your prompt reply."
    )

    def render_result(self, panel, result):
        text, variant = risk_level_label(result.risk_level)
        _card_header(panel, "Risk score", text, variant)
        ImageLabel(panel, charts.gauge_chart(result.risk_score, variant=gauge_variant(result.risk_score))).pack()

        _card_header(panel, "Win probability")
        ImageLabel(panel, charts.progress_bar(result.win_probability, size=(360, 16),
                                              variant="success")).pack(anchor="w")
        ttk.Label(panel, text=f"Expected win rate: {result.win_probability}%",
                  style="Card.TLabel").pack(anchor="w", pady=(4, 0))

        _card_header(panel, "Key risk factors")
        ttk.Label(panel, text="Click a factor to see why it matters.",
                  style="CardMuted.TLabel").pack(anchor="w")
        for factor in result.risk_factors:
            self._factor_row(panel, factor)

        section(panel, "Notes")
        paragraph(panel, result.notes)

    def _factor_row(self, panel, factor):
        row = ttk.Frame(panel, style="Card.TFrame")
        row.pack(fill="x", pady=2)
        detail = ttk.Label(row, text=RISK_FACTOR_EXPLANATIONS.get(factor, "No further explanation."),
                           style="CardMuted.TLabel", wraplength=420, justify="left")
        ttk.Button(row, text=f"⚠  {factor}", style="Ghost.TButton",
                   command=lambda: toggle_pack(detail, anchor="w", padx=(24, 0), pady=(2, 4))
                   ).pack(anchor="w", fill="x")


class EmotionFrame(AnalysisFrame):
    analysis_type = "EMOTION"
    feature = "emotion"
    heading = "Emotion Escalation Analysis"
    subheading = "See how heated the exchange has become and how fast it is escalating."
    sample_text = (
        "This is our third warning to the other party.\n"
        "You keep ignoring our requests, which is completely unfair.\n"
        "Either settle or we go all the way in court. Your choice.\n"
        "Every objection we raised so far has been dismissed.\n"
        "We can't take it any more and will respond with a hard line.\n"
        "Acknowledge your liability and compensate all damages.\n"
        "If necessary we will not hesitate to file a lawsuit."
    )

    def build_input_extras(self, parent):
        self.highlight_var = tk.BooleanVar(value=False)
        ttk.Checkbutton(parent, text="Highlight emotional words", style="Card.TCheckbutton",
                        variable=self.highlight_var, command=self._apply_highlight).pack(anchor="w")
        self.text.tag_configure("emotion", background=HIGHLIGHT, foreground="#fee2e2")

    def _update_counter(self):
        super()._update_counter()
        if hasattr(self, "highlight_var"):
            self._apply_highlight()

    def _apply_highlight(self):
        self.text.tag_remove("emotion", "1.0", "end")
        if not self.highlight_var.get():
            return
        pos = 0
        for segment, hit in highlight_segments(self.input_text()):
            if hit:
                self.text.tag_add("emotion", f"1.0+{pos}c", f"1.0+{pos + len(segment)}c")
            pos += len(segment)

    def render_result(self, panel, result):
        idx, pct = stage_progress(result.stage)
        _card_header(panel, "Current conflict stage", result.stage, "danger" if idx >= 2 else "warning")
        ImageLabel(panel, charts.stage_bar([label for _, label in ESCALATION_STAGES], idx)).pack(anchor="w")
        ttk.Label(panel, text=f"{pct:.0f}% of the way to litigation", style="CardMuted.TLabel").pack(anchor="w")

        _card_header(panel, "Aggression index")
        ImageLabel(panel, charts.gauge_chart(result.aggression_score, size=180,
                                             variant=gauge_variant(result.aggression_score))).pack()

        speed = ttk.Frame(panel, style="Card.TFrame")
        speed.pack(fill="x", pady=(8, 0))
        ttk.Label(speed, text="Escalation speed", style="Card.TLabel").pack(side="left")
        Badge(speed, result.escalation_speed, speed_variant(result.escalation_speed)).pack(side="left", padx=8)

        _card_header(panel, "Emotion trend")
        ImageLabel(panel, charts.line_chart([(p.t, p.value) for p in result.trend])).pack(anchor="w")

        section(panel, "Emotion keywords")
        ChipGroup(panel, result.emotion_keywords, variant="danger").pack(anchor="w")


class SimilarFrame(AnalysisFrame):
    analysis_type = "SIMILAR"
    feature = "similar"
    heading = "Similar Case Matching"
    subheading = "Compare your key issues with precedents that look like your case."
    sample_text = (
        "This is a commercial lease dispute.\n"
        "The landlord refuses to renew the lease, citing a building remodel.\n"
        "I have run my business in this unit for 5 years and invested a considerable premium.\n"
        "The landlord says they will bring in another tenant after the remodel and gives me "
        "no chance to recover the premium.\n"
        "Three months remain until the lease expires."
    )

    def __init__(self, parent, controller):
        self.included = set()
        super().__init__(parent, controller)

    def render_result(self, panel, result):
        _card_header(panel, "Key issue comparison")
        tree = ttk.Treeview(panel, columns=("input", "matched"), show="headings",
                            height=max(len(result.issue_compare), 1))
        tree.heading("input", text="Issue in your case")
        tree.heading("matched", text="Matched issue")
        tree.column("input", width=240, anchor="w")
        tree.column("matched", width=240, anchor="w")
        zebra(tree)
        for i, issue in enumerate(result.issue_compare):
            tree.insert("", "end", values=(issue.input_issue, issue.matched_issue), tags=(row_tag(i),))
        tree.pack(fill="x")

        _card_header(panel, f"Matched precedents (Top {len(result.top_matches)})")
        for match in result.top_matches:
            card = ttk.Frame(panel, style="Card.TFrame", padding=(0, 6))
            card.pack(fill="x")
            head = ttk.Frame(card, style="Card.TFrame")
            head.pack(fill="x")
            ttk.Label(head, text=match.case_title, style="Field.TLabel").pack(side="left")
            Badge(head, f"{similarity_percent(match.similarity)}% similar",
                  similarity_variant(match.similarity)).pack(side="right")
            paragraph(card, match.summary, style="CardMuted.TLabel")
            foot = ttk.Frame(card, style="Card.TFrame")
            foot.pack(fill="x", pady=(4, 0))
            Badge(foot, f"Winner: {match.winner}", winner_variant(match.winner)).pack(side="left")
            ttk.Button(foot, text="View ruling ↗", style="Ghost.TButton",
                       command=lambda m=match: self._open_match(m)).pack(side="right")

    def _open_match(self, match):
        dlg = Dialog(self, match.case_title, minsize=(560, 420))
        badges = ttk.Frame(dlg.body, style="Dialog.TFrame")
        badges.pack(anchor="w", pady=(0, 8))
        Badge(badges, f"{similarity_percent(match.similarity)}% similar",
              similarity_variant(match.similarity)).pack(side="left")
        Badge(badges, f"Winner: {match.winner}", winner_variant(match.winner)).pack(side="left", padx=6)

        ttk.Label(dlg.body, text="Case summary", style="Field.TLabel").pack(anchor="w", pady=(8, 2))
        ttk.Label(dlg.body, text=match.summary, style="Card.TLabel", wraplength=500,
                  justify="left").pack(anchor="w")
        ttk.Label(dlg.body, text="Key points of the ruling", style="Field.TLabel").pack(anchor="w", pady=(12, 2))
        ttk.Label(dlg.body, text=match.detail, style="Card.TLabel", wraplength=500,
                  justify="left").pack(anchor="w")

        include_var = tk.BooleanVar(value=match.case_title in self.included)

        def toggle():
            self.included, added = toggle_report_include(self.included, match.case_title)
            include_var.set(added)
            self.controller.toast("Added to the report." if added else "Removed from the report.", "info")

        ttk.Checkbutton(dlg.body, text="Include in report", style="Card.TCheckbutton",
                        variable=include_var, command=toggle).pack(anchor="w", pady=(12, 0))
        dlg.add_close()


class StrategyFrame(AnalysisFrame):
    analysis_type = "STRATEGY"
    feature = "strategy"
    heading = "Early Resolution Strategy"
    subheading = "Scenarios for settling the dispute before it reaches court."
    sample_text = (
        "This is a commercial building lease dispute.\n"
        "The landlord refuses to renew the lease, citing a remodel.\n"
        "I have run a restaurant in this unit for 5 years and paid a premium of about 30 million KRW.\n"
        "The building has no safety issues; the landlord simply wants to raise its value.\n"
        "Two months remain until the lease expires and finding a new place is hard.\n"
        "I would prefer an amicable settlement but will consider legal action if needed."
    )

    def __init__(self, parent, controller):
        self.compare_mode = False
        self.compare_list = []
        super().__init__(parent, controller)

    def render_result(self, panel, result):
        _card_header(panel, "Expected win probability", f"{result.expected_win_probability}%",
                     gauge_variant(100 - result.expected_win_probability))
        ImageLabel(panel, charts.progress_bar(result.expected_win_probability, size=(360, 16),
                                              variant="success")).pack(anchor="w")

        section(panel, "Strategy summary")
        paragraph(panel, result.summary.key_takeaway)
        for point in result.summary.focus_points:
            paragraph(panel, f"•  {point}", style="CardMuted.TLabel")

        head = _card_header(panel, "Recommended scenarios")
        ttk.Button(head, text="Compare mode: ON" if self.compare_mode else "Compare strategies",
                   style="Accent.TButton" if self.compare_mode else "Ghost.TButton",
                   command=self._toggle_compare_mode).pack(side="right")

        for scenario in result.scenarios:
            selected = scenario in self.compare_list
            card = ttk.Frame(panel, style="Card.TFrame", padding=(0, 6))
            card.pack(fill="x")
            top = ttk.Frame(card, style="Card.TFrame")
            top.pack(fill="x")
            ttk.Label(top, text=("✓ " if selected else "") + scenario.title, style="Field.TLabel").pack(side="left")
            Badge(top, f"effect: {scenario.effect}", effect_variant(scenario.effect)).pack(side="right", padx=(4, 0))
            Badge(top, f"difficulty: {scenario.difficulty}",
                  difficulty_variant(scenario.difficulty)).pack(side="right")
            paragraph(card, scenario.description, style="CardMuted.TLabel")
            if self.compare_mode:
                ttk.Button(card, text="✓ Selected" if selected else "Add to comparison", style="Ghost.TButton",
                           command=lambda s=scenario: self._toggle_compare(s)).pack(anchor="e")
            else:
                ttk.Button(card, text="Details", style="Ghost.TButton",
                           command=lambda s=scenario: self._open_scenario(s)).pack(anchor="e")

        if self.compare_mode and len(self.compare_list) == 2:
            self._render_comparison(panel)

        section(panel, "Disclaimer")
        paragraph(panel, result.disclaimer, style="CardMuted.TLabel")

    def _render_comparison(self, panel):
        _card_header(panel, "Strategy comparison")
        tree = ttk.Treeview(panel, columns=("item", "a", "b"), show="headings", height=4)
        a, b = self.compare_list
        tree.heading("item", text="")
        tree.heading("a", text=a.title)
        tree.heading("b", text=b.title)
        tree.column("item", width=110, anchor="w")
        zebra(tree)
        rows = [
            ("Difficulty", a.difficulty, b.difficulty),
            ("Effect", a.effect, b.effect),
            ("Next actions", len(a.next_actions), len(b.next_actions)),
        ]
        for i, row in enumerate(rows):
            tree.insert("", "end", values=row, tags=(row_tag(i),))
        tree.pack(fill="x")

    def _rerender(self):
        if self.result is not None:
            self.show_result(self.result)

    def _toggle_compare_mode(self):
        self.compare_mode = not self.compare_mode
        if not self.compare_mode:
            self.compare_list = []
        self._rerender()

    def _toggle_compare(self, scenario):
        try:
            self.compare_list = toggle_compare(self.compare_list, scenario)
        except CompareLimitError as e:
            self.controller.toast(str(e), "info")
            return
        self._rerender()

    def _open_scenario(self, scenario):
        dlg = Dialog(self, scenario.title, minsize=(560, 420))
        badges = ttk.Frame(dlg.body, style="Dialog.TFrame")
        badges.pack(anchor="w")
        Badge(badges, f"difficulty: {scenario.difficulty}", difficulty_variant(scenario.difficulty)).pack(side="left")
        Badge(badges, f"effect: {scenario.effect}", effect_variant(scenario.effect)).pack(side="left", padx=6)
        ttk.Label(dlg.body, text=scenario.description, style="Card.TLabel", wraplength=500,
                  justify="left").pack(anchor="w", pady=(10, 6))
        ttk.Label(dlg.body, text="Next actions", style="Field.TLabel").pack(anchor="w", pady=(6, 2))
        for i, action in enumerate(scenario.next_actions, start=1):
            ttk.Label(dlg.body, text=f"{i}. {action}", style="Card.TLabel").pack(anchor="w")

        def copy_template():
            self.clipboard_clear()
            self.clipboard_append(generate_notice_template(scenario))
            self.controller.toast("Notice template copied to the clipboard.", "success")

        actions = dlg.add_close()
        ttk.Button(actions, text="Copy notice template", style="Ghost.TButton",
                   command=copy_template).pack(side="left")
