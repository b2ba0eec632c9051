from __future__ import annotations

import netCDF4 as nc
import numpy as np
import pytest
import xarray as xr

from geogridnc.config import GridSpec
from geogridnc.errors import MaterializeError
from geogridnc.nc_writer import OutputLayout, write_netcdf


def _grid(spec: GridSpec) -> np.ndarray:
    return np.arange(spec.n_values, dtype=np.float32).reshape(spec.shape)


def test_layout_collapses_to_2d():
    assert OutputLayout.from_spec(GridSpec(nx=4, ny=3, nz=1)).dims == ("y", "x")
    assert OutputLayout.from_spec(GridSpec(nx=4, ny=3, nz=1)).sizes == (3, 4)
    layout = OutputLayout.from_spec(GridSpec(nx=4, ny=3, nz=2))
    assert layout.dims == ("z", "y", "x")
    assert layout.sizes == (2, 3, 4)
    assert (layout.var_name, layout.complevel, layout.shuffle) == ("var", 4, False)


def test_write_2d(tmp_path):
    spec = GridSpec(nx=4, ny=3, nz=1)
    out = tmp_path / "out.nc"

    report = write_netcdf(out, _grid(spec), spec)

    assert report.ok, report.lines()
    assert [s.step for s in report] == [
        "create", "def_dim y", "def_dim x", "def_var var",
        "def_var_deflate", "enddef", "put_var", "close",
    ]
    with nc.Dataset(out) as ds:
        assert list(ds.dimensions) == ["y", "x"]
        var = ds.variables["var"]
        assert var.dimensions == ("y", "x")
        assert var.dtype == np.float32
        filters = var.filters()
        assert filters["zlib"] is True
        assert filters["complevel"] == 4
        assert filters["shuffle"] is False


def test_write_3d_keeps_decode_order(tmp_path):
    spec = GridSpec(nx=4, ny=3, nz=2)
    out = tmp_path / "out.nc"
    grid = _grid(spec)

    report = write_netcdf(out, grid, spec)

    assert report.ok, report.lines()
    with xr.open_dataset(out, engine="netcdf4") as ds:
        da = ds["var"]
        assert da.dims == ("z", "y", "x")
        assert da.shape == (2, 3, 4)
        np.testing.assert_array_equal(da.values, grid)
        assert da.values[1, 2, 3] == 1 * 12 + 2 * 4 + 3


def test_accepts_flat_buffer(tmp_path):
    spec = GridSpec(nx=2, ny=2, nz=1)
    out = tmp_path / "flat.nc"

    report = write_netcdf(out, np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float32), spec)

    assert report.ok
    with xr.open_dataset(out, engine="netcdf4") as ds:
        np.testing.assert_array_equal(ds["var"].values, [[1, 2], [3, 4]])


def test_wrong_buffer_size_is_rejected(tmp_path):
    out = tmp_path / "x.nc"
    with pytest.raises(MaterializeError) as exc:
        write_netcdf(out, np.zeros(3, dtype=np.float32), GridSpec(nx=2, ny=2))
    assert exc.value.step == "put_var"
    assert not out.exists()


def test_no_clobber_reports_every_step(tmp_path):
    spec = GridSpec(nx=2, ny=2, nz=1)
    out = tmp_path / "exists.nc"
    out.write_bytes(b"not a netcdf file")

    report = write_netcdf(out, _grid(spec), spec, overwrite=False)

    assert not report.ok
    assert len(report.steps) == 8
    assert report.steps[0].step == "create"
    assert not report.steps[0].ok
    # later steps are still attempted and reported
    assert all(not s.ok for s in report.steps)
    assert report.lines()[1].startswith("[XX] def_dim y: ")
    assert out.read_bytes() == b"not a netcdf file"

    with pytest.raises(MaterializeError) as exc:
        report.raise_for_status()
    assert exc.value.step == "create"
    assert [e.step for e in report.errors()] == [s.step for s in report.steps]


def test_overwrite_replaces_existing_file(tmp_path):
    spec = GridSpec(nx=2, ny=1, nz=1)
    out = tmp_path / "twice.nc"
    write_netcdf(out, np.array([1, 2], dtype=np.float32), spec)

    report = write_netcdf(out, np.array([5, 6], dtype=np.float32), spec)

    assert report.ok
    with xr.open_dataset(out, engine="netcdf4") as ds:
        np.testing.assert_array_equal(ds["var"].values, [[5, 6]])


def test_ok_lines():
    from geogridnc.nc_writer import StepResult

    assert StepResult("create", True).line() == "[OK] create"
    assert StepResult("put_var", False, "NetCDF: HDF error").line() == "[XX] put_var: NetCDF: HDF error"


class _DatasetFailingOnVariable(nc.Dataset):
    def createVariable(self, *args, **kwargs):
        raise RuntimeError("NetCDF: boom")


def test_failure_after_create_keeps_going_and_closes(tmp_path, monkeypatch):
    monkeypatch.setattr(nc, "Dataset", _DatasetFailingOnVariable)
    spec = GridSpec(nx=2, ny=2, nz=1)
    out = tmp_path / "partial.nc"

    report = write_netcdf(out, _grid(spec), spec)

    assert report.ok is False
    assert report.lines() == [
        "[OK] create",
        "[OK] def_dim y",
        "[OK] def_dim x",
        "[XX] def_var var: NetCDF: boom",
        "[XX] def_var_deflate: no variable (an earlier step failed)",
        "[OK] enddef",
        "[XX] put_var: no variable (an earlier step failed)",
        "[OK] close",
    ]
    monkeypatch.undo()

    # the handle was closed: the file reopens with its dimensions and no variable
    with nc.Dataset(out) as ds:
        assert list(ds.dimensions) == ["y", "x"]
        assert "var" not in ds.variables
