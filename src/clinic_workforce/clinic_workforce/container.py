from __future__ import annotations

from dataclasses import dataclass

from config.config import Settings

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.report_service import AttendanceReportService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryRepository
from .directory.service import DirectoryService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.calculator.daily_units_calculator import DailyUnitsCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .schedule_blocks.mysql_schedule_block_repository import MySQLScheduleBlockRepository
from .schedule_blocks.repository import ScheduleBlockRepository
from .schedule_blocks.service import ScheduleBlockService


@dataclass(frozen=True)
class Container:
    settings: Settings

    directory_repo: DirectoryRepository
    blocks_repo: ScheduleBlockRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    payroll_repo: PayrollRepository

    directory_service: DirectoryService
    schedule_block_service: ScheduleBlockService
    attendance_service: AttendanceService
    attendance_report_service: AttendanceReportService
    leave_service: LeaveService
    payroll_service: PayrollService


def assemble_container(
    settings: Settings,
    *,
    directory_repo: DirectoryRepository,
    blocks_repo: ScheduleBlockRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, fakes in tests)."""

    directory_service = DirectoryService(directory_repo)
    schedule_block_service = ScheduleBlockService(blocks_repo, directory_service)
    attendance_service = AttendanceService(
        attendance_repo,
        directory_service,
        policy=AttendancePolicy(
            full_day_hours=settings.full_day_hours,
            half_day_hours=settings.half_day_hours,
        ),
        strategy_factory=AttendanceStrategyFactory(),
    )
    attendance_report_service = AttendanceReportService(attendance_repo)
    leave_service = LeaveService(leave_repo, directory_service, schedule_block_service)
    payroll_service = PayrollService(
        payroll_repo,
        attendance_service,
        directory_service,
        calculator=DailyUnitsCalculator(),
        forward_only=settings.payroll_forward_only,
    )

    return Container(
        settings=settings,
        directory_repo=directory_repo,
        blocks_repo=blocks_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        directory_service=directory_service,
        schedule_block_service=schedule_block_service,
        attendance_service=attendance_service,
        attendance_report_service=attendance_report_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(settings: Settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db_config))

    return assemble_container(
        settings,
        directory_repo=MySQLDirectoryRepository(conn),
        blocks_repo=MySQLScheduleBlockRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
    )
