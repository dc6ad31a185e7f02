"""
Tests for device detection and selection.
"""

import pytest

from pyrisksim.core.compute.device import DeviceInfo, get_cpu_info, select_device


class TestSelectDevice:

    def test_cpu(self):
        device = select_device('cpu')
        assert device.device_type == 'cpu'
        assert not device.is_gpu
        assert str(device).startswith("CPU (")

    def test_auto_returns_a_device(self):
        device = select_device('auto')
        assert device.device_type in ('cpu', 'cuda', 'mps')

    def test_gpu_raises_without_gpu(self, monkeypatch):
        monkeypatch.setattr(
            "pyrisksim.core.compute.device.detect_gpu", lambda: None,
        )
        with pytest.raises(RuntimeError, match="no GPU"):
            select_device('gpu')

    def test_auto_falls_back_to_cpu(self, monkeypatch):
        monkeypatch.setattr(
            "pyrisksim.core.compute.device.detect_gpu", lambda: None,
        )
        assert select_device('auto') == get_cpu_info()


class TestDeviceInfo:

    def test_gpu_str(self):
        info = DeviceInfo(device_type='cuda', device_index=0, name='Test GPU')
        assert info.is_gpu
        assert str(info) == "CUDA:0 (Test GPU)"
