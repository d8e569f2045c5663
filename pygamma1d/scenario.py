from __future__ import annotations

import dataclasses
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, List, Optional

from .core import DoseProfile, GammaSettings, GammaResult
from .analyzer import (compute_gamma, dose_difference, distance_to_agreement,
                       resample, DEFAULT_MATCH_TOLERANCE)


@dataclass(frozen=True)
class Scenario:
    """A named gamma configuration."""
    name: str
    settings: GammaSettings


def default_scenarios(base: Optional[GammaSettings] = None) -> List[Scenario]:
    """
    The four configuration variants of the Low et al. comparison, each
    derived from `base` (default: 3 %, 0.3 cm, global max, step 0.01,
    threshold 10 %):

    - "Initial": base settings
    - "Local Max.": local dose normalization
    - "2 %, 2 mm": tightened criteria (0.02 / 0.2)
    - "Resample 1x": resample step 1.0
    """
    base = base or GammaSettings()
    return [
        Scenario("Initial", base),
        Scenario("Local Max.", dataclasses.replace(base, use_global_max=False)),
        Scenario("2 %, 2 mm", dataclasses.replace(base, dose_criterion=0.02, dist_criterion=0.2)),
        Scenario("Resample 1x", dataclasses.replace(base, resample_step=1.0)),
    ]


class GammaComparison:
    """
    Compare a test profile against a reference profile under several
    gamma configurations.

    Notes
    -----
    - Every scenario owns its settings value; no configuration is shared
      or mutated between runs.
    - The diagnostic dose difference and DTA are computed once and are
      independent from the scenarios.
    """

    def __init__(self, test: DoseProfile, reference: DoseProfile,
                 scenarios: Optional[List[Scenario]] = None, *,
                 match_tolerance: float = DEFAULT_MATCH_TOLERANCE,
                 dta_step: float = 0.001):
        scenarios = default_scenarios() if scenarios is None else list(scenarios)
        if not scenarios:
            raise ValueError("GammaComparison requires at least one scenario.")
        names = [s.name for s in scenarios]
        if len(set(names)) != len(names):
            raise ValueError(f"Scenario names must be unique (got {names}).")

        self.test = test
        self.reference = reference
        self.scenarios = scenarios
        self.match_tolerance = match_tolerance
        self.dta_step = dta_step
        self._results: Optional[Dict[str, GammaResult]] = None

    # -------------------- gamma --------------------
    def run(self) -> Dict[str, GammaResult]:
        """Evaluate every scenario (results are cached on the instance)."""
        if self._results is None:
            self._results = {s.name: compute_gamma(self.test, self.reference, s.settings)
                             for s in self.scenarios}
        return self._results

    def pass_rates(self) -> Dict[str, float]:
        return {name: r.pass_rate for name, r in self.run().items()}

    # -------------------- diagnostics --------------------
    def dose_difference(self) -> np.ndarray:
        return dose_difference(self.test, self.reference)

    def distance_to_agreement(self) -> np.ndarray:
        """DTA against the reference resampled at `dta_step`."""
        resampled = resample(self.reference, self.dta_step)
        return distance_to_agreement(self.test, resampled, self.match_tolerance)

    # -------------------- tables --------------------
    def summary(self) -> pd.DataFrame:
        """One row per scenario with its pass rate and gamma statistics."""
        rows = []
        for scenario in self.scenarios:
            result = self.run()[scenario.name]
            stats = result.statistics()
            rows.append({
                "scenario": scenario.name,
                "label": scenario.settings.label(),
                "pass_rate": result.pass_rate,
                "n_evaluated": result.n_evaluated,
                "n_passed": result.n_passed,
                "mean_gamma": stats["mean"],
                "max_gamma": stats["max"],
            })
        return pd.DataFrame(rows)

    def profile_table(self) -> pd.DataFrame:
        """
        Per-sample table: position, test and reference doses, dose
        difference, DTA and one gamma column per scenario.
        """
        table = pd.DataFrame({
            "x": self.test.positions,
            "test": self.test.doses,
            "reference": self.reference.doses,
            "dose_difference": self.dose_difference(),
            "dta": self.distance_to_agreement(),
        })
        for name, result in self.run().items():
            table[f"gamma[{name}]"] = result.gamma
        return table

    def report(self) -> None:
        """Print the pass rate of every scenario."""
        for name, rate in self.pass_rates().items():
            print(f"Gamma Pass Rate ({name}): {100.0 * rate:.4g}%")
