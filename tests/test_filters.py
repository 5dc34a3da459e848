"""
Windowed-sinc FIR filters and the filter genes built on them.
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import pytest
import torch

from gasynth.components.filters import BandFilter, CutoffFilter, create_filter
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE, FilterType
from gasynth.dsp.filters import Filter, blackman_window, is_usable, kernel_length
from gasynth.dsp.oscillators import sine_wave


def _rms(t: torch.Tensor) -> float:
    return float(torch.sqrt(torch.mean(t.double() ** 2)))


def test_kernel_length_is_even():
    assert kernel_length(1.0) == 4
    assert kernel_length(0.7) == 6
    assert kernel_length(0.3) == 14
    assert kernel_length(0.01) == 400


def test_blackman_window_endpoints():
    w = blackman_window(64)
    assert w.shape[-1] == 64
    assert abs(w[0].item()) < 1e-9
    assert abs(w[-1].item()) < 1e-9
    assert w.max().item() <= 1.0


def test_low_pass_kernel_has_unit_dc_gain():
    kernel = Filter.low_pass_kernel(1000.0, 0.05)
    assert kernel.shape[-1] == kernel_length(0.05)
    assert abs(kernel.sum().item() - 1.0) < 1e-9


def test_high_pass_kernel_blocks_dc():
    kernel = Filter.high_pass_kernel(1000.0, 0.05)
    assert abs(kernel.sum().item()) < 1e-9


def test_band_pass_rejects_inverted_edges():
    with pytest.raises(ValueError):
        Filter.band_pass_kernel(5000.0, 100.0, 0.1)
    with pytest.raises(ValueError):
        Filter.band_reject_kernel(5000.0, 100.0, 0.1)


def test_apply_keeps_length():
    sig = sine_wave(440.0, 0.1, SAMPLE_RATE)
    out = Filter.apply(sig, Filter.low_pass_kernel(2000.0, 0.05))
    assert out.n_samples == sig.n_samples
    assert out.samples.dtype == torch.float32


def test_low_pass_attenuates_high_tone():
    sig = sine_wave(10_000.0, 0.2, SAMPLE_RATE)
    out = Filter.apply(sig, Filter.low_pass_kernel(500.0, 0.01))
    middle = slice(1000, sig.n_samples - 1000)
    assert _rms(out.samples[middle]) < 0.01 * _rms(sig.samples[middle])


def test_high_pass_keeps_high_tone():
    sig = sine_wave(10_000.0, 0.2, SAMPLE_RATE)
    out = Filter.apply(sig, Filter.high_pass_kernel(500.0, 0.01))
    middle = slice(1000, sig.n_samples - 1000)
    assert _rms(out.samples[middle]) > 0.9 * _rms(sig.samples[middle])


def test_is_usable():
    assert is_usable(Filter.low_pass_kernel(1000.0, 0.1))
    assert not is_usable(torch.tensor([float("nan"), 1.0]))
    assert not is_usable(torch.zeros(0))


def test_apply_on_empty_signal():
    empty = Signal([])
    assert Filter.apply(empty, Filter.low_pass_kernel(1000.0, 0.1)).n_samples == 0


# -----------------------------------------------------------------------------
# Filter genes
# -----------------------------------------------------------------------------

def test_create_filter_families():
    rng = np.random.default_rng(0)
    for kind in FilterType:
        gene = create_filter(kind, rng)
        assert gene.kind == kind
        assert 0.01 <= gene.band < 4.0
        if kind in (FilterType.BAND_PASS, FilterType.BAND_REJECT):
            assert isinstance(gene, BandFilter)
            assert gene.low <= gene.high
        else:
            assert isinstance(gene, CutoffFilter)
            assert 0.0 <= gene.cutoff < 20_000.0


def test_band_edges_sorted_on_construction():
    gene = BandFilter(FilterType.BAND_PASS, 5000.0, 100.0, 0.1)
    assert gene.low == 100.0
    assert gene.high == 5000.0


def test_family_mismatch_does_not_combine():
    rng = np.random.default_rng(1)
    low = CutoffFilter(FilterType.LOW_PASS, 1000.0, 0.1)
    high = CutoffFilter(FilterType.HIGH_PASS, 1000.0, 0.1)
    band = BandFilter(FilterType.BAND_PASS, 100.0, 5000.0, 0.1)
    assert low.combine(high, 0.05, rng) is None
    assert low.combine(band, 0.05, rng) is None
    assert band.combine(BandFilter(FilterType.BAND_REJECT, 100.0, 5000.0, 0.1), 0.05, rng) is None


def test_same_family_combines_between_parents():
    rng = np.random.default_rng(2)
    a = BandFilter(FilterType.BAND_REJECT, 100.0, 2000.0, 0.1)
    b = BandFilter(FilterType.BAND_REJECT, 300.0, 9000.0, 0.5)
    for _ in range(20):
        child = a.combine(b, 0.0, rng)
        assert child.kind == FilterType.BAND_REJECT
        assert child.low <= child.high
        assert 100.0 - 1e-9 <= child.low <= 300.0 + 1e-9
        assert 0.1 - 1e-9 <= child.band <= 0.5 + 1e-9


def test_filter_gene_kernels_match_family():
    lp = CutoffFilter(FilterType.LOW_PASS, 1000.0, 0.1)
    hp = CutoffFilter(FilterType.HIGH_PASS, 1000.0, 0.1)
    assert abs(lp.kernel().sum().item() - 1.0) < 1e-9
    assert abs(hp.kernel().sum().item()) < 1e-9
    bp = BandFilter(FilterType.BAND_PASS, 500.0, 2000.0, 0.1)
    assert bp.kernel().shape[-1] == 2 * kernel_length(0.1) - 1
    assert bp.is_usable()


def test_cutoff_filter_rejects_band_family():
    with pytest.raises(ValueError):
        CutoffFilter(FilterType.BAND_PASS, 1000.0, 0.1)
